"""Validation error types — error codes, semantic errors and the composite.

Validation problems are returned as data, never raised out of a validator.
"""

from enum import Enum
from typing import Iterable, Iterator, Optional

from ingress_validator.eskip.parser import EskipSyntaxError


class ErrorCode(str, Enum):
    """Deterministic error codes for every validation rule.

    Naming convention: CATEGORY_SPECIFIC_ISSUE
    """

    ANNOTATION_SYNTAX = "ANNOTATION_SYNTAX"
    ANNOTATION_INVALID = "ANNOTATION_INVALID"

    FILTER_UNKNOWN = "FILTER_UNKNOWN"
    FILTER_INVALID_ARGS = "FILTER_INVALID_ARGS"

    PREDICATE_UNKNOWN = "PREDICATE_UNKNOWN"
    PREDICATE_INVALID_ARGS = "PREDICATE_INVALID_ARGS"

    ROUTE_INVALID_BACKEND = "ROUTE_INVALID_BACKEND"
    ROUTE_DUPLICATE_PREDICATE = "ROUTE_DUPLICATE_PREDICATE"
    ROUTE_INVALID = "ROUTE_INVALID"


class SemanticError(Exception):
    """A construct that parses but is not accepted by the registries."""

    def __init__(self, message: str, code: ErrorCode):
        super().__init__(message)
        self.code = code


class InvalidFilterError(SemanticError):
    pass


class InvalidPredicateError(SemanticError):
    pass


class InvalidRouteError(SemanticError):
    """A complete route that is not valid. `route_id` may be empty."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ROUTE_INVALID, route_id: str = ""):
        super().__init__(message, code)
        self.route_id = route_id


class AnnotationError(Exception):
    """A problem qualified with the annotation key it was found in."""

    def __init__(self, key: str, cause: Exception):
        super().__init__(f'invalid "{key}" annotation: {cause}')
        self.key = key
        self.cause = cause
        self.__cause__ = cause

    @property
    def is_syntax_error(self) -> bool:
        return isinstance(self.cause, EskipSyntaxError)

    @property
    def code(self) -> ErrorCode:
        if self.is_syntax_error:
            return ErrorCode.ANNOTATION_SYNTAX
        if isinstance(self.cause, SemanticError):
            return self.cause.code
        if isinstance(self.cause, ValidationErrors):
            leaves = list(self.cause.leaves())
            if leaves and isinstance(leaves[0], SemanticError):
                return leaves[0].code
        return ErrorCode.ANNOTATION_INVALID


class ValidationErrors(Exception):
    """Ordered composite of independent errors.

    str() joins the children with newlines; iterate (or call leaves()) to
    assert on individual problems instead of matching text.
    """

    def __init__(self, errors: list[Exception]):
        self.errors = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))

    def __iter__(self) -> Iterator[Exception]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __str__(self) -> str:
        return "\n".join(str(e) for e in self.errors)

    def leaves(self) -> Iterator[Exception]:
        """Yield every non-composite error, depth first, in order."""
        for err in self.errors:
            if isinstance(err, ValidationErrors):
                yield from err.leaves()
            else:
                yield err


def join_errors(errors: Iterable[Optional[Exception]]) -> Optional[ValidationErrors]:
    """Join errors, dropping None. Returns None when nothing is left."""
    remaining = [e for e in errors if e is not None]
    if not remaining:
        return None
    return ValidationErrors(remaining)

"""Match conditions known to the router."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ingress_validator.args import ArgKind, check_args
from ingress_validator.eskip.models import Arg

HTTP_METHODS = {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "CONNECT", "OPTIONS", "TRACE"}

# Predicates matching on the path tree; a route may carry only one of them.
PATH_TREE_PREDICATES = {"Path", "PathSubtree"}


class InvalidPredicateParameters(ValueError):
    """Raised by a spec when a predicate's arguments are not accepted."""


class PredicateSpec(ABC):
    """Abstract base for a predicate kind."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def check_args(self, args: list[Arg]) -> None:
        """Raise InvalidPredicateParameters if args are not accepted."""
        ...


class ArgsPredicateSpec(PredicateSpec):
    """Predicate spec described by its positional argument kinds."""

    def __init__(
        self,
        name: str,
        kinds: Optional[list[ArgKind]] = None,
        optional: int = 0,
        variadic: Optional[ArgKind] = None,
        extra: Optional[Callable[[list[Arg]], None]] = None,
    ):
        self._name = name
        self.kinds = kinds or []
        self.optional = optional
        self.variadic = variadic
        self.extra = extra

    @property
    def name(self) -> str:
        return self._name

    def check_args(self, args: list[Arg]) -> None:
        try:
            check_args(args, self.kinds, self.optional, self.variadic)
            if self.extra:
                self.extra(args)
        except ValueError as e:
            raise InvalidPredicateParameters(str(e)) from e


def _absolute_path(args: list[Arg]) -> None:
    if not args[0].startswith("/"):
        raise ValueError(f"path must start with '/', got {args[0]!r}")


def _http_methods(args: list[Arg]) -> None:
    for method in args:
        if method.upper() not in HTTP_METHODS:
            raise ValueError(f"unknown HTTP method {method!r}")


def _non_empty(args: list[Arg]) -> None:
    if not args:
        raise ValueError("expected at least 1 argument, got 0")


def _method_list(args: list[Arg]) -> None:
    _non_empty(args)
    _http_methods(args)


def _traffic_ratio(args: list[Arg]) -> None:
    if not 0 <= args[0] <= 1:
        raise ValueError(f"traffic ratio must be between 0 and 1, got {args[0]}")
    if len(args) == 2:
        raise ValueError("traffic group requires both a cookie name and a value")


S = ArgKind.STRING
R = ArgKind.REGEXP

BUILTIN_PREDICATES = [
    ArgsPredicateSpec("Path", [S], extra=_absolute_path),
    ArgsPredicateSpec("PathSubtree", [S], extra=_absolute_path),
    ArgsPredicateSpec("PathRegexp", [R]),
    ArgsPredicateSpec("Host", [R]),
    ArgsPredicateSpec("HostAny", variadic=S, extra=_non_empty),
    ArgsPredicateSpec("Method", [S], extra=_http_methods),
    ArgsPredicateSpec("Methods", variadic=S, extra=_method_list),
    ArgsPredicateSpec("Header", [S, S]),
    ArgsPredicateSpec("HeaderRegexp", [S, R]),
    ArgsPredicateSpec("Cookie", [S, R]),
    ArgsPredicateSpec("QueryParam", [S, R], optional=1),
    ArgsPredicateSpec("Weight", [ArgKind.INT]),
    ArgsPredicateSpec("True"),
    ArgsPredicateSpec("False"),
    ArgsPredicateSpec("Traffic", [ArgKind.NUMBER, S, S], optional=2, extra=_traffic_ratio),
]


def default_predicates() -> list[PredicateSpec]:
    """Return the built-in predicate specs."""
    return list(BUILTIN_PREDICATES)

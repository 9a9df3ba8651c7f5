"""Filter registry — the filter kinds known to the router and their argument checks.

New filters are added by registering a spec; the validators never change.
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional

from ingress_validator.args import ArgKind, check_args
from ingress_validator.eskip.models import Arg


class InvalidFilterParameters(ValueError):
    """Raised by a spec when a filter's arguments are not accepted."""


class FilterSpec(ABC):
    """Abstract base for a filter kind."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name used in eskip expressions."""
        ...

    @abstractmethod
    def check_args(self, args: list[Arg]) -> None:
        """Raise InvalidFilterParameters if args are not accepted."""
        ...


class ArgsFilterSpec(FilterSpec):
    """Filter spec described by its positional argument kinds.

    An optional `extra` callable runs after the shape check for value-level
    rules (status code ranges and the like); it raises ValueError.
    """

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
            raise InvalidFilterParameters(str(e)) from e


class Registry:
    """Name → FilterSpec mapping. Read-only once handed to a validator."""

    def __init__(self, specs: Optional[list[FilterSpec]] = None):
        self._specs: dict[str, FilterSpec] = {}
        for spec in specs or []:
            self.register(spec)

    def register(self, spec: FilterSpec) -> None:
        self._specs[spec.name] = spec

    def get(self, name: str) -> Optional[FilterSpec]:
        return self._specs.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)


# ── Built-in value checks ──

def _status_code(args: list[Arg]) -> None:
    code = int(args[0])
    if not 100 <= code <= 599:
        raise ValueError(f"invalid status code {code}")


def _redirect_code(args: list[Arg]) -> None:
    code = int(args[0])
    if not 300 <= code <= 399:
        raise ValueError(f"invalid redirect status code {code}")


def _bool_string(args: list[Arg]) -> None:
    if args[0] not in ("true", "false"):
        raise ValueError(f"expected \"true\" or \"false\", got {args[0]!r}")


def _positive_count(args: list[Arg]) -> None:
    if int(args[0]) <= 0:
        raise ValueError("request count must be positive")


S = ArgKind.STRING

BUILTIN_FILTERS = [
    ArgsFilterSpec("setPath", [S]),
    ArgsFilterSpec("modPath", [ArgKind.REGEXP, S]),
    ArgsFilterSpec("setRequestHeader", [S, S]),
    ArgsFilterSpec("setResponseHeader", [S, S]),
    ArgsFilterSpec("appendRequestHeader", [S, S]),
    ArgsFilterSpec("appendResponseHeader", [S, S]),
    ArgsFilterSpec("dropRequestHeader", [S]),
    ArgsFilterSpec("dropResponseHeader", [S]),
    ArgsFilterSpec("status", [ArgKind.INT], extra=_status_code),
    ArgsFilterSpec("redirectTo", [ArgKind.INT, S], extra=_redirect_code),
    ArgsFilterSpec("inlineContent", [S, S], optional=1),
    ArgsFilterSpec("preserveHost", [S], extra=_bool_string),
    ArgsFilterSpec("compress", variadic=ArgKind.ANY),
    ArgsFilterSpec("tee", [S, ArgKind.REGEXP, S], optional=2),
    ArgsFilterSpec("ratelimit", [ArgKind.INT, S], extra=_positive_count),
]


def default_registry() -> Registry:
    """Create a registry holding the built-in filters."""
    return Registry(BUILTIN_FILTERS)

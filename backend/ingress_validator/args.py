"""Argument shape checks shared by filter and predicate specs."""

import re
from enum import Enum
from typing import Optional

from ingress_validator.eskip.models import Arg, Regexp


class ArgKind(str, Enum):
    """Accepted kind of a single call argument."""

    STRING = "string"
    INT = "int"
    NUMBER = "number"
    REGEXP = "regexp"  # /regexp/ literal or a string holding a pattern
    ANY = "any"


def _describe(arg: Arg) -> str:
    if isinstance(arg, Regexp):
        return "regexp"
    if isinstance(arg, str):
        return "string"
    return "number"


def _check_kind(position: int, arg: Arg, kind: ArgKind) -> None:
    if kind == ArgKind.ANY:
        return
    if kind == ArgKind.STRING:
        ok = isinstance(arg, str)
    elif kind == ArgKind.INT:
        ok = isinstance(arg, int) or (isinstance(arg, float) and arg.is_integer())
    elif kind == ArgKind.NUMBER:
        ok = isinstance(arg, (int, float))
    else:
        ok = isinstance(arg, (Regexp, str))
        if ok:
            pattern = arg.pattern if isinstance(arg, Regexp) else arg
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"argument {position}: invalid regular expression {pattern!r}: {e}") from e
    if not ok:
        raise ValueError(f"argument {position}: expected {kind.value}, got {_describe(arg)}")


def check_args(
    args: list[Arg],
    kinds: list[ArgKind],
    optional: int = 0,
    variadic: Optional[ArgKind] = None,
) -> None:
    """Check args against a positional shape.

    Args:
        args: Parsed call arguments
        kinds: Expected kind per position
        optional: How many trailing entries of kinds may be omitted
        variadic: Kind accepted for any number of extra arguments

    Raises:
        ValueError: describing the first mismatch
    """
    required = len(kinds) - optional
    if len(args) < required:
        raise ValueError(f"expected at least {required} argument(s), got {len(args)}")
    if variadic is None and len(args) > len(kinds):
        raise ValueError(f"expected at most {len(kinds)} argument(s), got {len(args)}")

    for i, arg in enumerate(args):
        kind = kinds[i] if i < len(kinds) else variadic
        _check_kind(i + 1, arg, kind)

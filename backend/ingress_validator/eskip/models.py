"""Eskip data model — parsed filters, predicates and routes.

Instances only live for the duration of one validation call.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class BackendType(str, Enum):
    """Kind of route backend."""

    NETWORK = "network"
    SHUNT = "shunt"
    LOOPBACK = "loopback"
    DYNAMIC = "dynamic"
    LB = "lb"


class Regexp(BaseModel):
    """A /regexp/ literal argument. Kept apart from plain strings so specs can tell them apart."""

    pattern: str

    def __str__(self) -> str:
        return "/" + self.pattern.replace("/", "\\/") + "/"


Arg = Union[Regexp, str, int, float]


def format_arg(arg: Arg) -> str:
    if isinstance(arg, str):
        return '"' + arg.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return str(arg)


class Filter(BaseModel):
    """A single filter call, e.g. setPath("/foo")."""

    name: str
    args: list[Arg] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.name}({', '.join(format_arg(a) for a in self.args)})"


class Predicate(BaseModel):
    """A single predicate call, e.g. Path("/foo")."""

    name: str
    args: list[Arg] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.name}({', '.join(format_arg(a) for a in self.args)})"


class Route(BaseModel):
    """A complete route: predicates, filters and a backend."""

    id: str = ""
    predicates: list[Predicate] = Field(default_factory=list)
    filters: list[Filter] = Field(default_factory=list)
    backend_type: BackendType = BackendType.NETWORK
    backend: str = ""
    lb_algorithm: Optional[str] = None
    lb_endpoints: list[str] = Field(default_factory=list)

    def backend_string(self) -> str:
        if self.backend_type == BackendType.NETWORK:
            return format_arg(self.backend)
        if self.backend_type == BackendType.LB:
            parts = [self.lb_algorithm] if self.lb_algorithm else []
            parts.extend(format_arg(ep) for ep in self.lb_endpoints)
            return "<" + ", ".join(parts) + ">"
        return f"<{self.backend_type.value}>"

    def __str__(self) -> str:
        preds = " && ".join(str(p) for p in self.predicates) or "*"
        parts = [preds] + [str(f) for f in self.filters] + [self.backend_string()]
        text = " -> ".join(parts)
        return f"{self.id}: {text}" if self.id else text

"""The route expression language carried in ingress annotations.

Usage:
    from ingress_validator.eskip import parse, parse_filters, parse_predicates

    routes = parse('r1: Path("/") -> "https://example.org"')
"""

from ingress_validator.eskip.models import BackendType, Filter, Predicate, Regexp, Route
from ingress_validator.eskip.parser import EskipSyntaxError, parse, parse_filters, parse_predicates

__all__ = [
    "BackendType",
    "Filter",
    "Predicate",
    "Regexp",
    "Route",
    "EskipSyntaxError",
    "parse",
    "parse_filters",
    "parse_predicates",
]

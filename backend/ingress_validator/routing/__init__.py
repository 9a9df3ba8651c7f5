"""Routing — predicate specs and complete-route checks.

Usage:
    from ingress_validator.routing import Options, check_route, default_predicates

    opts = Options(filter_registry=default_registry(), predicates=default_predicates())
    check_route(opts, route)
"""

from ingress_validator.routing.predicates import (
    ArgsPredicateSpec,
    InvalidPredicateParameters,
    PredicateSpec,
    default_predicates,
)
from ingress_validator.routing.route import Options, check_route

__all__ = [
    "ArgsPredicateSpec",
    "InvalidPredicateParameters",
    "PredicateSpec",
    "default_predicates",
    "Options",
    "check_route",
]

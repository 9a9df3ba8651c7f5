"""Semantic checkers for parsed filters, predicates and routes.

Each checker returns the problems found (None when valid) rather than
raising, and records one check, plus one failure when invalid, in the
metrics sink.
"""

from typing import Optional

import structlog

from ingress_validator.definitions.models import ResourceContext
from ingress_validator.errors import (
    ErrorCode,
    InvalidFilterError,
    InvalidPredicateError,
    InvalidRouteError,
    ValidationErrors,
    join_errors,
)
from ingress_validator.eskip.models import Filter, Predicate, Route
from ingress_validator.filters.registry import InvalidFilterParameters, Registry
from ingress_validator.metrics import Metrics
from ingress_validator.routing.predicates import InvalidPredicateParameters, PredicateSpec
from ingress_validator.routing.route import Options, check_route

logger = structlog.get_logger()


def _record(ctx: ResourceContext, metrics: Metrics, kind: str, failed: bool) -> None:
    metrics.inc_counter(f"validation.{ctx.resource_type}.{kind}.checks")
    if failed:
        metrics.inc_counter(f"validation.{ctx.resource_type}.{kind}.invalid.{ctx.namespace}.{ctx.name}")


def validate_filters(
    ctx: ResourceContext,
    registry: Registry,
    metrics: Metrics,
    filters: list[Filter],
) -> Optional[ValidationErrors]:
    """Check every filter against the registry. All failures are reported."""
    errors = []
    for f in filters:
        spec = registry.get(f.name)
        if spec is None:
            errors.append(InvalidFilterError(f'filter "{f.name}" is not supported', ErrorCode.FILTER_UNKNOWN))
            continue
        try:
            spec.check_args(f.args)
        except InvalidFilterParameters as e:
            errors.append(InvalidFilterError(f'invalid filter "{f.name}": {e}', ErrorCode.FILTER_INVALID_ARGS))

    _record(ctx, metrics, "filters", bool(errors))
    return join_errors(errors)


def validate_predicates(
    ctx: ResourceContext,
    specs: list[PredicateSpec],
    metrics: Metrics,
    predicates: list[Predicate],
) -> Optional[ValidationErrors]:
    """Check every predicate against the known specs. All failures are reported."""
    by_name = {spec.name: spec for spec in specs}
    errors = []
    for p in predicates:
        spec = by_name.get(p.name)
        if spec is None:
            errors.append(
                InvalidPredicateError(f'predicate "{p.name}" is not supported', ErrorCode.PREDICATE_UNKNOWN)
            )
            continue
        try:
            spec.check_args(p.args)
        except InvalidPredicateParameters as e:
            errors.append(
                InvalidPredicateError(f'invalid predicate "{p.name}": {e}', ErrorCode.PREDICATE_INVALID_ARGS)
            )

    _record(ctx, metrics, "predicates", bool(errors))
    return join_errors(errors)


def validate_route(
    ctx: ResourceContext,
    options: Options,
    metrics: Metrics,
    route: Route,
) -> Optional[InvalidRouteError]:
    """Check one complete route. Only the first problem within the route is reported."""
    try:
        check_route(options, route)
    except InvalidRouteError as e:
        _record(ctx, metrics, "routes", True)
        logger.debug("route_invalid", route_id=route.id, namespace=ctx.namespace, name=ctx.name, error=str(e))
        return e

    _record(ctx, metrics, "routes", False)
    return None

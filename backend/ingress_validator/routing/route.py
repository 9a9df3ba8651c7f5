"""Checks a complete parsed route against the registries."""

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse

from ingress_validator.errors import ErrorCode, InvalidRouteError
from ingress_validator.eskip.models import BackendType, Route
from ingress_validator.filters.registry import InvalidFilterParameters, Registry
from ingress_validator.routing.predicates import (
    PATH_TREE_PREDICATES,
    InvalidPredicateParameters,
    PredicateSpec,
)

LB_ALGORITHMS = {"roundRobin", "random", "consistentHash", "powerOfRandomNChoices"}


@dataclass(frozen=True)
class Options:
    """Registries a route is checked against."""

    filter_registry: Registry
    predicates: list[PredicateSpec] = field(default_factory=list)

    def predicate_spec(self, name: str) -> Optional[PredicateSpec]:
        for spec in self.predicates:
            if spec.name == name:
                return spec
        return None


def _valid_address(address: str) -> bool:
    parsed = urlparse(address)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _check_predicates(options: Options, route: Route) -> None:
    path_tree = 0
    for predicate in route.predicates:
        spec = options.predicate_spec(predicate.name)
        if spec is None:
            raise InvalidRouteError(
                f'predicate "{predicate.name}" not found', ErrorCode.PREDICATE_UNKNOWN
            )
        try:
            spec.check_args(predicate.args)
        except InvalidPredicateParameters as e:
            raise InvalidRouteError(
                f'invalid predicate "{predicate.name}": {e}', ErrorCode.PREDICATE_INVALID_ARGS
            ) from e
        if predicate.name in PATH_TREE_PREDICATES:
            path_tree += 1

    if path_tree > 1:
        raise InvalidRouteError("duplicate path tree predicate", ErrorCode.ROUTE_DUPLICATE_PREDICATE)


def _check_filters(options: Options, route: Route) -> None:
    for f in route.filters:
        spec = options.filter_registry.get(f.name)
        if spec is None:
            raise InvalidRouteError(f'filter "{f.name}" not found', ErrorCode.FILTER_UNKNOWN)
        try:
            spec.check_args(f.args)
        except InvalidFilterParameters as e:
            raise InvalidRouteError(
                f'invalid filter "{f.name}": {e}', ErrorCode.FILTER_INVALID_ARGS
            ) from e


def _check_backend(route: Route) -> None:
    if route.backend_type == BackendType.NETWORK:
        if not _valid_address(route.backend):
            raise InvalidRouteError(
                f"invalid backend address {route.backend!r}", ErrorCode.ROUTE_INVALID_BACKEND
            )
    elif route.backend_type == BackendType.LB:
        if route.lb_algorithm and route.lb_algorithm not in LB_ALGORITHMS:
            raise InvalidRouteError(
                f"unknown load balancing algorithm {route.lb_algorithm!r}",
                ErrorCode.ROUTE_INVALID_BACKEND,
            )
        if not route.lb_endpoints:
            raise InvalidRouteError("load balanced backend without endpoints", ErrorCode.ROUTE_INVALID_BACKEND)
        for endpoint in route.lb_endpoints:
            if not _valid_address(endpoint):
                raise InvalidRouteError(
                    f"invalid endpoint address {endpoint!r}", ErrorCode.ROUTE_INVALID_BACKEND
                )


def check_route(options: Options, route: Route) -> None:
    """Check one route; the first problem found is raised.

    Order: predicates, path tree duplicates, filters, backend.

    Raises:
        InvalidRouteError: tagged with the route id when the route has one
    """
    try:
        _check_predicates(options, route)
        _check_filters(options, route)
        _check_backend(route)
    except InvalidRouteError as e:
        if route.id:
            raise InvalidRouteError(f'route "{route.id}": {e}', e.code, route.id) from e.__cause__
        raise

"""Wires settings, registries and the metrics sink into a validator."""

from functools import lru_cache
from typing import Optional

from ingress_validator.config import Settings, get_settings
from ingress_validator.definitions.ingress import IngressV1Validator
from ingress_validator.filters import default_registry
from ingress_validator.metrics import InMemoryMetrics, Metrics
from ingress_validator.routing import default_predicates


def build_validator(settings: Settings, metrics: Optional[Metrics] = None) -> IngressV1Validator:
    """Create an ingress validator with the built-in filters and predicates."""
    return IngressV1Validator(
        filter_registry=default_registry(),
        predicate_specs=default_predicates(),
        metrics=metrics or InMemoryMetrics(),
        enable_advanced_validation=settings.ENABLE_ADVANCED_VALIDATION,
    )


@lru_cache
def get_validator() -> IngressV1Validator:
    return build_validator(get_settings())

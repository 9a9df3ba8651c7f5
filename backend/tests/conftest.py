"""Shared fixtures for the validator tests."""

from typing import Optional

import pytest

from ingress_validator.definitions import IngressV1Item, IngressV1Validator, ObjectMeta
from ingress_validator.filters import default_registry
from ingress_validator.metrics import InMemoryMetrics
from ingress_validator.routing import Options, default_predicates


def make_item(annotations: Optional[dict] = None, namespace: str = "default", name: str = "myapp") -> IngressV1Item:
    return IngressV1Item(metadata=ObjectMeta(namespace=namespace, name=name, annotations=annotations))


@pytest.fixture
def metrics():
    return InMemoryMetrics()


@pytest.fixture
def advanced_validator(metrics):
    return IngressV1Validator(default_registry(), default_predicates(), metrics, enable_advanced_validation=True)


@pytest.fixture
def syntax_validator(metrics):
    return IngressV1Validator(default_registry(), default_predicates(), metrics, enable_advanced_validation=False)


@pytest.fixture
def route_options():
    return Options(filter_registry=default_registry(), predicates=default_predicates())

"""Annotation validation for routing resources.

Usage:
    from ingress_validator.definitions import IngressV1Item, get_validator

    errors = get_validator().validate(IngressV1Item.model_validate(obj))
    if errors is not None:
        # reject with str(errors)
"""

from ingress_validator.definitions.base import Validator
from ingress_validator.definitions.factory import build_validator, get_validator
from ingress_validator.definitions.ingress import AnnotationResult, AnnotationStage, IngressV1Validator
from ingress_validator.definitions.models import (
    INGRESS_FILTER_ANNOTATION,
    INGRESS_PREDICATE_ANNOTATION,
    INGRESS_ROUTES_ANNOTATION,
    IngressV1Item,
    ObjectMeta,
    ResourceContext,
    ResourceType,
)

__all__ = [
    "Validator",
    "build_validator",
    "get_validator",
    "AnnotationResult",
    "AnnotationStage",
    "IngressV1Validator",
    "INGRESS_FILTER_ANNOTATION",
    "INGRESS_PREDICATE_ANNOTATION",
    "INGRESS_ROUTES_ANNOTATION",
    "IngressV1Item",
    "ObjectMeta",
    "ResourceContext",
    "ResourceType",
]

"""Ingress validator — checks the eskip annotations of an ingress.

Three annotations are checked independently: the filter chain, the predicate
chain and the full route definitions. Every present annotation is parsed;
when advanced validation is enabled the parsed definitions are also checked
against the filter registry and predicate specs. All problems found are
returned together, in the order filter, predicate, routes.

Usage:
    validator = IngressV1Validator(default_registry(), default_predicates(), InMemoryMetrics())
    errors = validator.validate(item)
    if errors:
        for err in errors.leaves():
            ...
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

import structlog

from ingress_validator.definitions.base import Validator
from ingress_validator.definitions.models import (
    INGRESS_FILTER_ANNOTATION,
    INGRESS_PREDICATE_ANNOTATION,
    INGRESS_ROUTES_ANNOTATION,
    IngressV1Item,
    ResourceContext,
    ResourceType,
)
from ingress_validator.definitions.validation import validate_filters, validate_predicates, validate_route
from ingress_validator.errors import AnnotationError, ValidationErrors, join_errors
from ingress_validator.eskip import EskipSyntaxError, parse, parse_filters, parse_predicates
from ingress_validator.filters.registry import Registry
from ingress_validator.metrics import Metrics
from ingress_validator.routing.predicates import PredicateSpec
from ingress_validator.routing.route import Options

logger = structlog.get_logger()


class AnnotationStage(str, Enum):
    """How far the check of one annotation got."""

    ABSENT = "absent"              # key not present, nothing parsed
    SYNTAX_ERROR = "syntax_error"  # parse failed, semantics never checked
    PARSED = "parsed"              # parsed, semantics not requested
    CHECKED = "checked"            # parsed and semantically checked


@dataclass
class AnnotationResult:
    """Outcome of checking one annotation."""

    key: str
    stage: AnnotationStage
    definitions: list = field(default_factory=list)
    errors: list[AnnotationError] = field(default_factory=list)

    def error(self) -> Optional[ValidationErrors]:
        return join_errors(self.errors)


class IngressV1Validator(Validator[IngressV1Item]):
    """Validates the filter, predicate and routes annotations of an ingress.

    The configuration is read-only after construction, so one instance can
    serve concurrent validate() calls.
    """

    def __init__(
        self,
        filter_registry: Registry,
        predicate_specs: list[PredicateSpec],
        metrics: Metrics,
        enable_advanced_validation: bool = False,
    ):
        self.filter_registry = filter_registry
        self.predicate_specs = list(predicate_specs)
        self.metrics = metrics
        self.enable_advanced_validation = enable_advanced_validation
        self._route_options = Options(filter_registry=filter_registry, predicates=self.predicate_specs)

    @property
    def name(self) -> str:
        return "IngressV1Validator"

    def validate(self, item: IngressV1Item) -> Optional[ValidationErrors]:
        """Check all three annotations and join their problems.

        Returns:
            None when every present annotation is valid, otherwise the
            problems in the order filter, predicate, routes
        """
        start_time = time.perf_counter()

        results = [
            self.check_filter_annotation(item),
            self.check_predicate_annotation(item),
            self.check_routes_annotation(item),
        ]
        errors = join_errors(r.error() for r in results)

        logger.info(
            "annotation_validation_complete",
            validator=self.name,
            namespace=item.metadata.namespace,
            name=item.metadata.name,
            advanced=self.enable_advanced_validation,
            stages={r.key: r.stage.value for r in results},
            total_errors=len(list(errors.leaves())) if errors is not None else 0,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return errors

    def check_filter_annotation(self, item: IngressV1Item) -> AnnotationResult:
        return self._check_annotation(item, INGRESS_FILTER_ANNOTATION, parse_filters, self._check_filters)

    def check_predicate_annotation(self, item: IngressV1Item) -> AnnotationResult:
        return self._check_annotation(item, INGRESS_PREDICATE_ANNOTATION, parse_predicates, self._check_predicates)

    def check_routes_annotation(self, item: IngressV1Item) -> AnnotationResult:
        return self._check_annotation(item, INGRESS_ROUTES_ANNOTATION, parse, self._check_routes)

    # ── Per-annotation procedure ──

    def _check_annotation(
        self,
        item: IngressV1Item,
        key: str,
        parse_text: Callable[[str], list],
        check: Callable[[ResourceContext, list], list[Exception]],
    ) -> AnnotationResult:
        annotations = item.annotations
        if key not in annotations:
            return AnnotationResult(key, AnnotationStage.ABSENT)

        try:
            definitions = parse_text(annotations[key])
        except EskipSyntaxError as e:
            logger.info(
                "annotation_syntax_error",
                key=key,
                namespace=item.metadata.namespace,
                name=item.metadata.name,
                error=str(e),
            )
            return AnnotationResult(key, AnnotationStage.SYNTAX_ERROR, errors=[AnnotationError(key, e)])

        if not self.enable_advanced_validation:
            return AnnotationResult(key, AnnotationStage.PARSED, definitions)

        errors = [AnnotationError(key, problem) for problem in check(self._context(item), definitions)]
        if errors:
            logger.info(
                "annotation_invalid",
                key=key,
                namespace=item.metadata.namespace,
                name=item.metadata.name,
                errors=len(errors),
            )
        return AnnotationResult(key, AnnotationStage.CHECKED, definitions, errors)

    def _context(self, item: IngressV1Item) -> ResourceContext:
        return ResourceContext(
            namespace=item.metadata.namespace,
            name=item.metadata.name,
            resource_type=ResourceType.INGRESS,
        )

    def _check_filters(self, ctx: ResourceContext, filters: list) -> list[Exception]:
        err = validate_filters(ctx, self.filter_registry, self.metrics, filters)
        return [err] if err is not None else []

    def _check_predicates(self, ctx: ResourceContext, predicates: list) -> list[Exception]:
        err = validate_predicates(ctx, self.predicate_specs, self.metrics, predicates)
        return [err] if err is not None else []

    def _check_routes(self, ctx: ResourceContext, routes: list) -> list[Exception]:
        # One error per failing route; later routes are still checked.
        errors = []
        for route in routes:
            err = validate_route(ctx, self._route_options, self.metrics, route)
            if err is not None:
                errors.append(err)
        return errors

"""Resources being validated, and the context errors are tagged with."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

# Annotation keys carrying eskip expressions.
INGRESS_FILTER_ANNOTATION = "zalando.org/skipper-filter"
INGRESS_PREDICATE_ANNOTATION = "zalando.org/skipper-predicate"
INGRESS_ROUTES_ANNOTATION = "zalando.org/skipper-routes"


class ResourceType(str, Enum):
    """Kind of resource a validation ran against."""

    INGRESS = "ingress"


class ObjectMeta(BaseModel):
    """Subset of Kubernetes object metadata used for validation."""

    namespace: str = ""
    name: str = ""
    annotations: Optional[dict[str, str]] = None


class IngressV1Item(BaseModel):
    """An ingress resource. Only metadata is inspected; spec is passed through."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: dict = Field(default_factory=dict)

    model_config = {"extra": "allow"}

    @property
    def annotations(self) -> dict[str, str]:
        return self.metadata.annotations or {}


class ResourceContext(BaseModel):
    """Where a problem originated: built fresh for every validation."""

    namespace: str
    name: str
    resource_type: ResourceType

    model_config = {"frozen": True, "use_enum_values": True}

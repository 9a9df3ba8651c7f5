"""Kubernetes AdmissionReview models (admission.k8s.io/v1)."""

from pydantic import BaseModel, Field
from typing import Optional, Literal


class AdmissionRequest(BaseModel):
    """The request half of an AdmissionReview."""

    uid: str
    operation: Literal["CREATE", "UPDATE", "DELETE", "CONNECT"] = "CREATE"
    name: str = ""
    namespace: str = ""
    object: Optional[dict] = None

    model_config = {"extra": "allow"}


class AdmissionStatus(BaseModel):
    """Reason shown to the user when a request is rejected."""

    code: Optional[int] = None
    message: str = ""


class AdmissionResponse(BaseModel):
    """The response half of an AdmissionReview."""

    uid: str
    allowed: bool
    status: Optional[AdmissionStatus] = None


class AdmissionReview(BaseModel):
    """Envelope sent by the API server and returned by the webhook."""

    api_version: str = Field(default="admission.k8s.io/v1", alias="apiVersion")
    kind: str = "AdmissionReview"
    request: Optional[AdmissionRequest] = None
    response: Optional[AdmissionResponse] = None

    model_config = {"populate_by_name": True}

"""Admission webhook — validates ingresses submitted to the API server."""

import structlog
from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError

from ingress_validator.definitions import IngressV1Item
from ingress_validator.models.admission import AdmissionResponse, AdmissionReview, AdmissionStatus

router = APIRouter()

logger = structlog.get_logger()


def _review(uid: str, allowed: bool, message: str = "") -> AdmissionReview:
    status = AdmissionStatus(code=400, message=message) if not allowed else None
    return AdmissionReview(response=AdmissionResponse(uid=uid, allowed=allowed, status=status))


@router.post("/ingresses", response_model=AdmissionReview, response_model_exclude_none=True)
async def admit_ingress(review: AdmissionReview, request: Request):
    """Admit or reject an ingress based on its eskip annotations."""
    if review.request is None:
        raise HTTPException(status_code=400, detail="admission review without request")

    req = review.request
    if req.operation == "DELETE":
        return _review(req.uid, True)

    if req.object is None:
        raise HTTPException(status_code=400, detail="admission request without object")

    try:
        item = IngressV1Item.model_validate(req.object)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"invalid ingress object: {e}") from e

    errors = request.app.state.validator.validate(item)
    if errors is None:
        logger.info("ingress_admitted", uid=req.uid, namespace=req.namespace, name=req.name)
        return _review(req.uid, True)

    logger.info(
        "ingress_rejected",
        uid=req.uid,
        namespace=req.namespace,
        name=req.name,
        errors=len(list(errors.leaves())),
    )
    return _review(req.uid, False, str(errors))

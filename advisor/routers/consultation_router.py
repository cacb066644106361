"""Consultation router — validates leads and relays them to the webhook."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from advisor.config import get_settings
from advisor.errors import GENERIC_CONSULTATION_ERROR, AdvisorError
from advisor.models.request_models import ConsultationRequest
from advisor.models.response_models import ConsultationResponse, ErrorResponse
from advisor.models.schema_validator import validate_payload
from advisor.routers.responses import error_response, method_not_allowed, read_json_body
from advisor.tools.lead_forwarder_tool import forward_lead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["consultation"])


def get_webhook_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Dependency: transport for the webhook client (None = real network)."""
    return None


# ── Endpoints ─────────────────────────────────────────────────────────────────


@router.post(
    "/consultation-request",
    response_model=ConsultationResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_consultation_request(
    request: Request,
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_webhook_transport),
) -> ConsultationResponse | JSONResponse:
    """Validate a consultation request and forward it to the lead webhook."""
    body = await read_json_body(request)
    outcome = validate_payload(ConsultationRequest, body)

    if not outcome.ok:
        logger.warning(
            "Consultation validation failed: %s",
            "; ".join(f"{e.field}: {e.message}" for e in outcome.errors),
        )
        return error_response(400, "Invalid request data", details=outcome.errors)

    consultation = outcome.value
    logger.info(
        "Received consultation request: session=%s selected=%d",
        consultation.metadata.session_id,
        len(consultation.project_details.selected_recommendations),
    )

    try:
        ack = await forward_lead(consultation, transport=transport)
    except AdvisorError as exc:
        logger.error(
            "Error processing consultation request: %s (session=%s) %s",
            type(exc).__name__, consultation.metadata.session_id, exc.detail,
        )
        return error_response(500, "Internal server error", message=exc.message)
    except Exception:
        logger.exception("Unexpected error processing consultation request")
        return error_response(500, "Internal server error", message=GENERIC_CONSULTATION_ERROR)

    return ConsultationResponse(data=ack)


@router.get("/consultation-request", include_in_schema=False)
async def consultation_method_not_allowed() -> JSONResponse:
    return method_not_allowed()

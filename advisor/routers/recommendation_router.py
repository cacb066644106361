"""Recommendation router — /api endpoints for AI recommendations."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from advisor.agents.completion_client import CompletionClient, OpenAICompletionClient
from advisor.agents.recommendation_agent import generate_recommendations
from advisor.config import get_settings
from advisor.errors import GENERIC_RECOMMENDATION_ERROR, AdvisorError
from advisor.models.request_models import RecommendationRequest
from advisor.models.response_models import (
    ErrorResponse,
    HealthResponse,
    RecommendationsResponse,
)
from advisor.models.schema_validator import validate_payload
from advisor.routers.responses import error_response, method_not_allowed, read_json_body

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recommendations"])

DESCRIPTION_REQUIRED = "Business description is required"


def get_completion_client() -> CompletionClient:
    """Dependency: the production completion client built from current settings."""
    return OpenAICompletionClient(get_settings())


# ── Endpoints ─────────────────────────────────────────────────────────────────


@router.post(
    "/recommendations",
    response_model=RecommendationsResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def create_recommendations(
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
) -> RecommendationsResponse | JSONResponse:
    """Turn a business description (or intake form) into AI recommendations."""
    body = await read_json_body(request)
    outcome = validate_payload(RecommendationRequest, body)

    if not outcome.ok:
        failed = outcome.failed_fields()
        logger.info("Rejected recommendation request: %s", sorted(failed))
        if failed & {"businessDescription", "body"}:
            return error_response(400, DESCRIPTION_REQUIRED, details=outcome.errors)
        return error_response(400, "Invalid request data", details=outcome.errors)

    try:
        return await generate_recommendations(outcome.value, client)
    except AdvisorError as exc:
        logger.error(
            "Error generating recommendations: %s (status=%d) %s",
            type(exc).__name__, exc.status_code, exc.detail,
        )
        return error_response(exc.status_code, exc.message)
    except Exception:
        logger.exception("Unexpected error generating recommendations")
        return error_response(500, GENERIC_RECOMMENDATION_ERROR)


@router.get("/recommendations", include_in_schema=False)
async def recommendations_method_not_allowed() -> JSONResponse:
    return method_not_allowed()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Simple liveness probe."""
    return HealthResponse()

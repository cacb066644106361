"""Recommendation pipeline — description in, validated recommendations out.

Flow:
1. Pick the prompt mode (advanced only when a structured profile is present)
2. Build system + user instructions for the template variant
3. One completion call
4. Normalize and parse the raw text into a JSON array
5. Filter, cap and number the recommendations
6. Advisory check: phone businesses should get a Customer Service entry
"""

from __future__ import annotations

import logging

from advisor.agents.completion_client import CompletionClient
from advisor.agents.recommendation_validator import validate_recommendations
from advisor.agents.response_normalizer import parse_array
from advisor.config import Settings, get_settings
from advisor.models.request_models import RecommendationRequest
from advisor.models.response_models import Recommendation, RecommendationsResponse
from advisor.prompts.recommendation_prompt import build_prompt

logger = logging.getLogger(__name__)

VOICE_CHAT_CATEGORY = "Customer Service"


async def generate_recommendations(
    request: RecommendationRequest,
    client: CompletionClient,
    settings: Settings | None = None,
) -> RecommendationsResponse:
    """End-to-end pipeline for one recommendation request.

    Raises
    ------
    AdvisorError subclasses from the completion, normalization and
    validation steps; the router maps them to HTTP statuses.
    """
    settings = settings or get_settings()
    description = request.business_description

    mode = request.mode
    if request.structured and mode == "basic":
        logger.info("Structured request without usable formData — falling back to basic mode")

    prompt = build_prompt(
        mode,
        description,
        request.form_data,
        basic_template=settings.basic_template,
    )
    logger.info(
        "Generating recommendations — mode=%s template=%s phone_business=%s",
        mode, prompt.template.name, prompt.phone_business,
    )

    raw_text = await client.complete(
        prompt.system,
        prompt.user,
        max_tokens=prompt.template.max_tokens,
    )

    parsed = parse_array(raw_text)
    recommendations = validate_recommendations(
        parsed,
        max_count=prompt.template.max_count,
        required_fields=prompt.template.required_fields,
    )

    if prompt.phone_business:
        check_voice_and_chat(description, recommendations)

    logger.info("Returning %d recommendations (template=%s)", len(recommendations), prompt.template.name)
    return RecommendationsResponse(
        recommendations=recommendations,
        business_description=description,
    )


def check_voice_and_chat(description: str, recommendations: list[Recommendation]) -> bool:
    """Log a warning when a phone business got no Customer Service recommendation.

    Advisory only: the result is returned for observability and never changes
    what the caller receives.
    """
    honoured = any(r.category.strip() == VOICE_CHAT_CATEGORY for r in recommendations)
    if not honoured:
        logger.warning(
            "Phone/appointment business got no '%s' recommendation: categories=%s description=%r",
            VOICE_CHAT_CATEGORY,
            [r.category for r in recommendations],
            description[:120],
        )
    return honoured

"""Recommendation Validator/Capper.

Keeps parsed elements whose mandatory fields are all present and non-empty,
preserves the model's order, truncates to the template cap and numbers the
survivors 1..N.  Incomplete elements are dropped silently; only a fully empty
result is an error.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from advisor.errors import NoValidRecommendations
from advisor.models.response_models import Recommendation
from advisor.prompts.recommendation_prompt import BASE_FIELDS

logger = logging.getLogger(__name__)


def validate_recommendations(
    parsed: Iterable[Any],
    max_count: int,
    required_fields: tuple[str, ...] = BASE_FIELDS,
) -> list[Recommendation]:
    """Filter, cap and number recommendations from parsed model output."""
    items = list(parsed)
    complete = [item for item in items if _is_complete(item, required_fields)]

    dropped = len(items) - len(complete)
    if dropped:
        logger.info("Dropped %d/%d incomplete recommendations", dropped, len(items))

    kept = complete[:max_count]
    if not kept:
        logger.error("No valid recommendations in model output (%d elements)", len(items))
        raise NoValidRecommendations(detail="No valid recommendations generated")

    return [_to_recommendation(position, item) for position, item in enumerate(kept, start=1)]


def _is_complete(item: Any, required_fields: tuple[str, ...]) -> bool:
    if not isinstance(item, dict):
        return False
    for name in required_fields:
        value = item.get(name)
        if name == "suggestedTools":
            if not (isinstance(value, list) and value):
                return False
        elif not (isinstance(value, str) and value):
            return False
    return True


def _to_recommendation(position: int, item: dict[str, Any]) -> Recommendation:
    tools = item.get("suggestedTools")
    if isinstance(tools, list):
        tools = [str(tool) for tool in tools if tool]
    else:
        tools = None

    # Model-supplied ids are ignored
    return Recommendation(
        id=position,
        title=item["title"],
        description=item["description"],
        category=item["category"],
        difficulty=item["difficulty"],
        estimated_cost=item["estimatedCost"],
        time_to_implement=item["timeToImplement"],
        suggested_tools=tools,
    )

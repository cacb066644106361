"""Response Normalizer — recover a JSON array from raw model text.

The model is told to answer with a bare JSON array but regularly wraps it in
a fenced code block or opens with a sentence of prose.  Normalization trims,
strips a leading fence (with or without a language tag) together with the
closing fence, then drops everything before the first ``[``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from advisor.errors import MalformedModelOutput

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```\s*$")


def normalize(raw_text: str) -> str:
    """Return the JSON text candidate contained in ``raw_text``."""
    text = raw_text.strip()

    if text.startswith("```"):
        text = _OPENING_FENCE.sub("", text, count=1)
        text = _CLOSING_FENCE.sub("", text, count=1).strip()

    bracket = text.find("[")
    if bracket > 0:
        text = text[bracket:]
    return text


def parse_array(raw_text: str) -> list[Any]:
    """Normalize and parse model output into a list.

    Trailing prose after the array is tolerated and ignored.
    """
    text = normalize(raw_text)
    try:
        parsed, end = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse model output: %s | raw=%r", exc, raw_text[:500])
        raise MalformedModelOutput(detail="Invalid JSON response from OpenAI") from exc

    if end < len(text.rstrip()):
        logger.debug("Ignoring %d trailing characters after JSON array", len(text) - end)

    if not isinstance(parsed, list):
        logger.error("Model output is %s, expected array | raw=%r", type(parsed).__name__, raw_text[:500])
        raise MalformedModelOutput(detail="Model output is not a JSON array")
    return parsed

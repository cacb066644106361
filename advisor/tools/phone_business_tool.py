"""Phone-Business Detection Tool.

Flags businesses whose customers reach them by phone or book appointments.
For those businesses the prompt explicitly asks for both a chatbot and a voice
agent, and the pipeline logs an advisory warning when the model ignored it.
Detection never changes whether a request succeeds.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Type

from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# ── Phone / appointment signal patterns (case-insensitive) ───────────────────

PHONE_PATTERNS: list[tuple[str, str]] = [
    (r"\b(phone|telephone|hotline|voicemail|callers?|call[- ]?cent(er|re)|call (us|ahead|in))\b",
     "phone_calls"),
    (r"\b(miss(es|ed|ing)?|answer(s|ed|ing)?|tak(e|es|ing)|return(s|ed|ing)?|incoming|inbound|customer|client|patient)"
     r"\s+(a lot of\s+|many\s+|all\s+|the\s+|our\s+|their\s+)?calls\b",
     "phone_calls"),
    (r"\b(customers?|clients?|patients?|people|guests?)\s+(call|calls|calling)\b",
     "phone_calls"),
    (r"\b(appointments?|bookings?|book(ed|s)?\s+(a|an|in|online)|reservations?|schedul(e|es|ed|ing)\s+(visits?|sessions?|consultations?))\b",
     "appointments"),
    (r"\b(receptionist|front[- ]desk|walk[- ]?ins?|dispatch(er)?)\b",
     "front_desk"),
    (r"\b(salon|barber(shop)?|spa|clinic|dental|dentist|chiropract\w*|veterinar\w*|plumb(er|ing)|hvac|locksmith)\b",
     "phone_heavy_industry"),
]


class PhoneBusinessInput(BaseModel):
    """Input schema for the Phone-Business Detection tool."""

    text: str = Field(..., description="Business description and any profile hints")


class PhoneBusinessOutput(BaseModel):
    """Output schema for the Phone-Business Detection tool."""

    is_phone_business: bool = Field(..., description="Whether phone/appointment signals were found")
    signal: str = Field(default="", description="Category of the first matching signal")
    matched: str = Field(default="", description="Text fragment that matched")


class PhoneBusinessTool(BaseTool):
    """Detects businesses that handle phone calls or appointments."""

    name: str = "phone_business_detector"
    description: str = (
        "Analyses a business description to decide whether the business takes phone "
        "calls or appointments. Returns {is_phone_business, signal, matched}."
    )
    args_schema: Type[BaseModel] = PhoneBusinessInput

    def _run(self, text: str) -> dict[str, Any]:
        """Synchronous detection logic."""
        return self._detect(text)

    async def _arun(self, text: str) -> dict[str, Any]:
        """Async wrapper — detection is CPU-only so just delegates."""
        return self._detect(text)

    # ── Core logic ────────────────────────────────────────────────────────

    def _detect(self, text: str) -> dict[str, Any]:
        match = self._match_phone_patterns(text)
        if match:
            signal, fragment = match
            logger.debug("Phone business detected: signal=%s matched=%r", signal, fragment)
            return PhoneBusinessOutput(
                is_phone_business=True,
                signal=signal,
                matched=fragment,
            ).model_dump()

        return PhoneBusinessOutput(is_phone_business=False).model_dump()

    @staticmethod
    def _match_phone_patterns(text: str) -> Optional[tuple[str, str]]:
        """Return (signal, fragment) for the first matching pattern, or None."""
        lower = text.lower()
        for pattern, signal in PHONE_PATTERNS:
            found = re.search(pattern, lower)
            if found:
                return signal, found.group(0)
        return None


def is_phone_business(text: str) -> bool:
    """Convenience wrapper used by the prompt builder and the advisory check."""
    return PhoneBusinessTool()._run(text=text)["is_phone_business"]

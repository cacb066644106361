"""Completion Client — one chat-completion call per request.

``CompletionClient`` is the narrow seam the pipeline depends on; tests swap in
a stub returning canned text.  ``OpenAICompletionClient`` is the production
implementation on top of LangChain's ``ChatOpenAI``.
"""

from __future__ import annotations

import logging
from typing import Protocol

import openai
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from advisor.config import Settings, get_settings
from advisor.errors import (
    AdvisorError,
    UpstreamAuthError,
    UpstreamEmptyResponse,
    UpstreamProviderError,
    UpstreamQuotaExceeded,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def complete(self, system_text: str, user_text: str, max_tokens: int = 1500) -> str:
        ...


class OpenAICompletionClient:
    """Issues exactly one chat-completion request; no retries."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    async def complete(self, system_text: str, user_text: str, max_tokens: int = 1500) -> str:
        settings = self._settings
        if not settings.openai_api_key:
            logger.error("OPENAI_API_KEY is not set — refusing to call the model")
            raise UpstreamUnavailable(detail="OPENAI_API_KEY missing")

        llm = ChatOpenAI(
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            temperature=settings.recommendation_temperature,
            max_tokens=max_tokens,
            max_retries=0,
        )
        messages = [
            SystemMessage(content=system_text),
            HumanMessage(content=user_text),
        ]

        try:
            raw = await llm.ainvoke(messages)
        except Exception as exc:
            raise translate_provider_error(exc) from exc

        content = raw.content if isinstance(raw.content, str) else ""
        if not content.strip():
            logger.error("Model returned no text content (model=%s)", settings.openai_model)
            raise UpstreamEmptyResponse(detail="Empty response from OpenAI")
        return content


def translate_provider_error(exc: Exception) -> AdvisorError:
    """Map a provider exception onto the upstream error taxonomy.

    Structured SDK exception types are checked first; message substrings are
    only a fallback for errors that arrive wrapped or untyped.
    """
    message = str(exc)
    logger.error("Model provider call failed: %s: %s", type(exc).__name__, message)

    if isinstance(exc, AdvisorError):
        return exc
    if isinstance(exc, openai.AuthenticationError):
        return UpstreamAuthError(detail=message)
    if isinstance(exc, openai.RateLimitError):
        if getattr(exc, "code", None) == "insufficient_quota" or "quota" in message.lower():
            return UpstreamQuotaExceeded(detail=message)
        return UpstreamProviderError(detail=message)

    if "API key" in message:
        return UpstreamAuthError(detail=message)
    if "quota" in message:
        return UpstreamQuotaExceeded(detail=message)
    return UpstreamProviderError(detail=message)

"""Lead Forwarder Tool.

Relays a validated consultation request to the lead-automation webhook
(an n8n workflow in production) with a single POST.  Nothing is retried or
queued: if delivery fails the caller gets a 500 and must resubmit.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type

import httpx
from langchain_core.tools import BaseTool
from pydantic import BaseModel, Field

from advisor.config import Settings, get_settings
from advisor.errors import WebhookCallFailed, WebhookNotConfigured
from advisor.models.request_models import ConsultationRequest
from advisor.models.response_models import ConsultationAck

logger = logging.getLogger(__name__)


class LeadForwarderInput(BaseModel):
    """Input schema for the Lead Forwarder tool."""

    payload: dict[str, Any] = Field(
        ...,
        description="Validated consultation request in wire (camelCase) form",
    )


class LeadForwarderTool(BaseTool):
    """Posts consultation leads to the configured webhook."""

    name: str = "lead_forwarder"
    description: str = (
        "Forwards a validated consultation request to the lead webhook. "
        "Returns the webhook's response body (any shape)."
    )
    args_schema: Type[BaseModel] = LeadForwarderInput

    # Injected from settings
    webhook_url: str = ""
    timeout: float = 30.0
    transport: Optional[Any] = None

    def _run(self, payload: dict[str, Any]) -> Any:
        """Synchronous send — uses httpx sync client."""
        url = self._require_url()
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise self._unreachable(exc) from exc
        return self._handle_response(resp)

    async def _arun(self, payload: dict[str, Any]) -> Any:
        """Async send — uses httpx async client."""
        url = self._require_url()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise self._unreachable(exc) from exc
        return self._handle_response(resp)

    # ── Internal helpers ──────────────────────────────────────────────────

    def _require_url(self) -> str:
        if not self.webhook_url:
            logger.error("N8N_WEBHOOK_URL environment variable is not set")
            raise WebhookNotConfigured(detail="N8N_WEBHOOK_URL missing")
        return self.webhook_url

    @staticmethod
    def _unreachable(exc: httpx.HTTPError) -> WebhookCallFailed:
        logger.error("Lead webhook unreachable: %s: %s", type(exc).__name__, exc)
        return WebhookCallFailed(detail=f"webhook unreachable: {exc}")

    @staticmethod
    def _handle_response(resp: httpx.Response) -> Any:
        if not resp.is_success:
            logger.error(
                "Lead webhook failed: %s %s | body=%r",
                resp.status_code, resp.reason_phrase, resp.text[:500],
            )
            raise WebhookCallFailed(detail=f"webhook failed: {resp.status_code} {resp.reason_phrase}")

        try:
            body: Any = resp.json()
        except ValueError:
            body = resp.text
        logger.info("Lead webhook accepted submission: status=%s", resp.status_code)
        logger.debug("Lead webhook response: %r", body)
        return body


async def forward_lead(
    consultation: ConsultationRequest,
    settings: Settings | None = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ConsultationAck:
    """Deliver a consultation request and build the caller's acknowledgement."""
    settings = settings or get_settings()
    tool = LeadForwarderTool(
        webhook_url=settings.n8n_webhook_url,
        timeout=settings.webhook_timeout_seconds,
        transport=transport,
    )
    await tool._arun(payload=consultation.to_webhook_payload())

    return ConsultationAck(
        submission_id=consultation.metadata.session_id,
        timestamp=consultation.metadata.timestamp,
        email=consultation.contact_info.email,
        selected_recommendations=consultation.project_details.selected_recommendations,
    )

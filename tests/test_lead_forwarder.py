"""Lead Forwarder Tool — single POST, failure taxonomy, acknowledgement."""

from __future__ import annotations

import json

import httpx
import pytest

from advisor.config import Settings
from advisor.errors import WebhookCallFailed, WebhookNotConfigured
from advisor.models.request_models import ConsultationRequest
from advisor.tools.lead_forwarder_tool import LeadForwarderTool, forward_lead
from tests.conftest import SAMPLE_CONSULTATION

WEBHOOK_URL = "https://hooks.example.test/webhook/lead"


def _recording_transport(status: int = 200, body=None):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, json=body if body is not None else {"received": True})

    return httpx.MockTransport(handler), seen


@pytest.mark.asyncio
async def test_forward_lead_builds_ack_from_payload():
    transport, seen = _recording_transport(body={"workflow": "started", "id": 991})
    consultation = ConsultationRequest.model_validate(SAMPLE_CONSULTATION)

    ack = await forward_lead(consultation, settings=Settings(n8n_webhook_url=WEBHOOK_URL), transport=transport)

    assert ack.submission_id == "session-abc123"
    assert ack.email == "jamie@rosecitybakery.com"
    assert ack.selected_recommendations == SAMPLE_CONSULTATION["projectDetails"]["selectedRecommendations"]
    assert len(seen) == 1
    assert seen[0].headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_missing_url_raises_not_configured():
    tool = LeadForwarderTool(webhook_url="")
    with pytest.raises(WebhookNotConfigured) as excinfo:
        await tool._arun(payload={"a": 1})
    assert excinfo.value.status_code == 500


@pytest.mark.asyncio
async def test_non_success_status_raises_call_failed():
    transport, seen = _recording_transport(status=404, body={"message": "webhook not registered"})
    tool = LeadForwarderTool(webhook_url=WEBHOOK_URL, transport=transport)

    with pytest.raises(WebhookCallFailed) as excinfo:
        await tool._arun(payload={"a": 1})

    assert "404" in excinfo.value.detail
    assert "404" not in excinfo.value.message
    assert len(seen) == 1


def test_sync_run_posts_payload():
    transport, seen = _recording_transport()
    tool = LeadForwarderTool(webhook_url=WEBHOOK_URL, transport=transport)

    body = tool._run(payload={"contactInfo": {"email": "a@b.co"}})

    assert body == {"received": True}
    assert json.loads(seen[0].content) == {"contactInfo": {"email": "a@b.co"}}

"""Shared pytest fixtures for the recommendation funnel test suite."""

from __future__ import annotations

import copy
import json
import os
from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

# Ensure test environment variables are set BEFORE importing app modules
os.environ.setdefault("OPENAI_API_KEY", "test-key-not-real")
os.environ.setdefault("OPENAI_MODEL", "gpt-4o-mini")
os.environ.setdefault("N8N_WEBHOOK_URL", "https://hooks.example.test/webhook/lead")
os.environ.setdefault("BASIC_TEMPLATE", "basic")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


SAMPLE_RECOMMENDATIONS: list[dict[str, Any]] = [
    {
        "title": "AI Order Chatbot",
        "description": (
            "A website chatbot answers questions about daily bakes and takes pre-orders. "
            "It frees staff during the morning rush."
        ),
        "category": "Customer Service",
        "difficulty": "Easy",
        "estimatedCost": "$30-80/month",
        "timeToImplement": "1-2 weeks",
    },
    {
        "title": "Demand Forecasting for Bakes",
        "description": (
            "Predicts how many loaves and pastries to bake from sales history and weather. "
            "Cuts end-of-day waste."
        ),
        "category": "Analytics",
        "difficulty": "Medium",
        "estimatedCost": "$50-150/month",
        "timeToImplement": "3-4 weeks",
    },
    {
        "title": "Social Post Generator",
        "description": (
            "Drafts Instagram captions for new items from a photo. "
            "Keeps the feed active without extra staff time."
        ),
        "category": "Content Creation",
        "difficulty": "Easy",
        "estimatedCost": "$20-40/month",
        "timeToImplement": "1-2 weeks",
    },
    {
        "title": "Invoice Data Entry Automation",
        "description": (
            "Extracts supplier invoice lines into the bookkeeping tool automatically. "
            "Removes hours of manual typing each week."
        ),
        "category": "Automation",
        "difficulty": "Medium",
        "estimatedCost": "$40-100/month",
        "timeToImplement": "2-3 weeks",
    },
    {
        "title": "Loyalty Email Campaigns",
        "description": (
            "Segments regulars and sends personalised offers. "
            "Brings back lapsed customers."
        ),
        "category": "Marketing",
        "difficulty": "Easy",
        "estimatedCost": "$25-60/month",
        "timeToImplement": "1-3 weeks",
    },
]


SAMPLE_PROFILE: dict[str, Any] = {
    "businessName": "Rose City Bakery",
    "businessType": "Bakery",
    "businessDescription": "Neighbourhood bakery with a cafe counter",
    "companySize": "6-10",
    "monthlyRevenue": "$20k-50k",
    "yearsInBusiness": "3-5",
    "primaryGoals": ["Increase sales", "Reduce waste"],
    "currentChallenges": ["Manual ordering", "Staff time"],
    "techComfort": "Beginner",
    "budget": "$100-300",
    "timeline": "1-3 months",
    "focusAreas": ["Marketing", "Operations"],
}


SAMPLE_CONSULTATION: dict[str, Any] = {
    "contactInfo": {
        "firstName": "Jamie",
        "lastName": "Rivera",
        "email": "jamie@rosecitybakery.com",
        "phone": "+1 503 555 0100",
        "preferredContactMethod": "email",
    },
    "businessInfo": {
        "businessName": "Rose City Bakery",
        "website": "https://rosecitybakery.com",
        "businessDescription": "I run a small bakery in downtown Portland",
        "companySize": "6-10",
        "industry": "Food & Beverage",
    },
    "projectDetails": {
        "selectedRecommendations": ["AI Order Chatbot", "Demand Forecasting for Bakes"],
        "timeline": "1-3 months",
        "budget": "$100-300",
        "biggestChallenge": "Morning rush",
    },
    "metadata": {
        "source": "results-page",
        "timestamp": "2026-10-18T09:30:00.000Z",
        "sessionId": "session-abc123",
        "originalRecommendations": [
            {"id": 1, **SAMPLE_RECOMMENDATIONS[0]},
            {"id": 2, **SAMPLE_RECOMMENDATIONS[1]},
        ],
    },
}


class StubCompletionClient:
    """Deterministic stand-in for the model: returns canned text or raises."""

    def __init__(self, text: str = "", exc: Optional[Exception] = None) -> None:
        self.text = text
        self.exc = exc
        self.calls: list[dict[str, Any]] = []

    async def complete(self, system_text: str, user_text: str, max_tokens: int = 1500) -> str:
        self.calls.append({"system": system_text, "user": user_text, "max_tokens": max_tokens})
        if self.exc is not None:
            raise self.exc
        return self.text


def _make_model_output(items: list[dict[str, Any]], fenced: bool = False, preamble: str = "") -> str:
    """Helper to build raw model text around a JSON array."""
    body = json.dumps(items, indent=2)
    if fenced:
        body = f"```json\n{body}\n```"
    return f"{preamble}{body}"


def _consultation(**overrides: Any) -> dict[str, Any]:
    """Deep copy of the sample consultation; ``section__key=value`` overrides one field."""
    payload = copy.deepcopy(SAMPLE_CONSULTATION)
    for dotted, value in overrides.items():
        section, key = dotted.split("__")
        payload[section][key] = value
    return payload


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached process-wide; reset around every test."""
    from advisor.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app():
    from advisor.main import app as application

    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    """FastAPI synchronous test client."""
    return TestClient(app)


@pytest.fixture
def stub_completion(app):
    """Install a stub completion client; returns a factory taking text or exc."""
    from advisor.routers.recommendation_router import get_completion_client

    def _install(text: str = "", exc: Optional[Exception] = None) -> StubCompletionClient:
        stub = StubCompletionClient(text=text, exc=exc)
        app.dependency_overrides[get_completion_client] = lambda: stub
        return stub

    return _install

"""FastAPI application entry point for the AI recommendation funnel."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from advisor.config import get_settings, setup_logging
from advisor.routers.consultation_router import router as consultation_router
from advisor.routers.recommendation_router import router as recommendation_router

# Initialise logging early
setup_logging()
logger = logging.getLogger(__name__)


def _parse_origins(raw: str) -> list[str]:
    raw = raw.strip()
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    application = FastAPI(
        title="AI Recommendation Funnel",
        description=(
            "Turns a visitor's business description into validated AI use-case "
            "recommendations and relays consultation requests to the lead webhook."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=_parse_origins(settings.allowed_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    application.include_router(recommendation_router)
    application.include_router(consultation_router)

    @application.on_event("startup")
    async def _startup() -> None:
        logger.info(
            "Recommendation funnel starting — model=%s basic_template=%s model_key=%s webhook=%s",
            settings.openai_model,
            settings.basic_template,
            "set" if settings.openai_api_key else "missing",
            "set" if settings.n8n_webhook_url else "missing",
        )

    return application


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "advisor.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=True,
    )

"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central settings – values come from .env or environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    recommendation_temperature: float = 0.7

    # Prompt variant used for plain-description requests ("basic" | "basic_tools")
    basic_template: str = "basic"

    # Lead delivery
    n8n_webhook_url: str = ""
    webhook_timeout_seconds: float = 30.0

    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    allowed_origins: str = "*"
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return cached singleton settings instance."""
    return Settings()


def setup_logging() -> None:
    """Configure root logger based on settings."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from HTTP / SDK internals
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

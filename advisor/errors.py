"""Error taxonomy for the recommendation and lead pipelines.

Every error carries the HTTP status it maps to and a public message that is
safe to return to the caller.  Diagnostic detail (raw model text, upstream
status codes) belongs in the logs, never in ``message``.
"""

from __future__ import annotations

GENERIC_RECOMMENDATION_ERROR = "Failed to generate recommendations. Please try again."
GENERIC_CONSULTATION_ERROR = "Failed to process consultation request. Please try again."


class AdvisorError(Exception):
    """Base class for all handled pipeline failures."""

    status_code: int = 500
    message: str = GENERIC_RECOMMENDATION_ERROR

    def __init__(self, message: str | None = None, *, detail: str = "") -> None:
        self.message = message or self.message
        self.detail = detail
        super().__init__(detail or self.message)


# ── Client input ──────────────────────────────────────────────────────────────


class ClientInputError(AdvisorError):
    status_code = 400
    message = "Invalid request data"


# ── Configuration ─────────────────────────────────────────────────────────────


class ConfigurationError(AdvisorError):
    status_code = 500


class UpstreamUnavailable(ConfigurationError):
    message = "OpenAI API key is not configured. Please check your environment variables."


class WebhookNotConfigured(ConfigurationError):
    message = GENERIC_CONSULTATION_ERROR


# ── Upstream model provider ───────────────────────────────────────────────────


class UpstreamProviderError(AdvisorError):
    status_code = 500


class UpstreamAuthError(UpstreamProviderError):
    status_code = 401
    message = "Invalid OpenAI API key. Please check your configuration."


class UpstreamQuotaExceeded(UpstreamProviderError):
    status_code = 429
    message = "OpenAI API quota exceeded. Please check your usage limits."


# ── Model output integrity ────────────────────────────────────────────────────


class OutputIntegrityError(AdvisorError):
    status_code = 500


class UpstreamEmptyResponse(OutputIntegrityError):
    pass


class MalformedModelOutput(OutputIntegrityError):
    pass


class NoValidRecommendations(OutputIntegrityError):
    pass


# ── Downstream lead delivery ──────────────────────────────────────────────────


class DownstreamDeliveryError(AdvisorError):
    status_code = 500
    message = GENERIC_CONSULTATION_ERROR


class WebhookCallFailed(DownstreamDeliveryError):
    pass

"""Shared JSON helpers for the API routers."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from advisor.models.response_models import ErrorResponse, FieldError

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED = "Method not allowed"


async def read_json_body(request: Request) -> Any:
    """Return the decoded JSON body, or None when it is absent or not JSON.

    None is then rejected by the schema validator like any other bad shape.
    """
    try:
        return await request.json()
    except ValueError:
        logger.warning("Request body is not valid JSON: %s %s", request.method, request.url.path)
        return None


def error_response(
    status_code: int,
    error: str,
    message: Optional[str] = None,
    details: Optional[list[FieldError]] = None,
) -> JSONResponse:
    """Render the shared ``{error, message?, details?}`` body."""
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def method_not_allowed() -> JSONResponse:
    return error_response(405, METHOD_NOT_ALLOWED)

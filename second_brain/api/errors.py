"""JSON error responses shared by all routes."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from second_brain.api.models import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    """Build an ``{"error", "details"?}`` response."""
    body = ErrorResponse(error=error, details=details).model_dump(by_alias=True, exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything a route did not catch."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Something went wrong!"})

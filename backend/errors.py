"""Domain exceptions and their HTTP translation.

Every handler turns its exception into a ``{"message": ...}`` body so no
failure reaches the client as a framework default error page.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.metrics import PUBLISH_REQUESTS

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class EditorError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SubmissionError(EditorError):
    """Publish request is missing a required field."""

    status_code = 400


class ConfigurationError(EditorError):
    """Server is missing required configuration (e.g. the Qiita token)."""

    status_code = 500


class DraftNotFoundError(EditorError):
    """No draft file exists for the identifier."""

    status_code = 404

    def __init__(self, draft_id: str) -> None:
        super().__init__("Draft not found")
        self.draft_id = draft_id


class QiitaAPIError(EditorError):
    """Qiita rejected the request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(f"Qiita API error: {message}")
        self.status_code = status_code or 500


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def _editor_error_handler(request: Request, exc: EditorError) -> JSONResponse:
    if isinstance(exc, QiitaAPIError):
        PUBLISH_REQUESTS.labels(outcome="upstream_error").inc()
        logger.error("%s %s — %s", request.method, request.url.path, exc.message)
    elif isinstance(exc, SubmissionError):
        PUBLISH_REQUESTS.labels(outcome="invalid").inc()
        logger.info("Rejected submission: %s", exc.message)
    elif isinstance(exc, ConfigurationError):
        PUBLISH_REQUESTS.labels(outcome="misconfigured").inc()
        logger.error("Configuration error: %s", exc.message)
    else:
        logger.info("%s %s — %s", request.method, request.url.path, exc.message)
    return _error(exc.status_code, exc.message)


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err["loc"] if p != "body")
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    details = "; ".join(parts)
    logger.info("Invalid request body for %s: %s", request.url.path, details)
    return _error(400, f"Invalid request: {details}")


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, UNEXPECTED_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the JSON error translation to *app*."""
    app.add_exception_handler(EditorError, _editor_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

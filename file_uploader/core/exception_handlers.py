"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Routes never catch domain or
storage errors; they surface here and become the JSON error body
{"error", "message", "details"} with a status chosen by error code.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from file_uploader.core.config import get_settings
from file_uploader.domain.exceptions import UploaderException
from file_uploader.infrastructure.exceptions import BackendIOError

logger = logging.getLogger(__name__)

# Status per error_code; other BackendIOErrors are upstream failures (502).
STATUS_BY_ERROR_CODE: dict[str, int] = {
    "DISALLOWED_TYPE": 415,
    "SOURCE_NOT_FOUND": 404,
    "UPLOADER_NOT_FOUND": 404,
    "STORAGE_NOT_FOUND": 404,
    "STORAGE_PERMISSION_ERROR": 400,
    "CONFIGURATION_ERROR": 500,
}


def status_for(exc: UploaderException) -> int:
    """Return the HTTP status for an uploader error."""
    if exc.error_code in STATUS_BY_ERROR_CODE:
        return STATUS_BY_ERROR_CODE[exc.error_code]
    return 502 if isinstance(exc, BackendIOError) else 400


def _error_response(
    status: int, error: str, message: Any, details: Any = None
) -> JSONResponse:
    content: dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status, content=content)


def _handle_uploader_error(request: Request, exc: UploaderException) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error(
            "%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error_code
        )
    return JSONResponse(status_code=status, content=exc.to_dict())


def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(422, "VALIDATION_ERROR", "Request validation failed", exc.errors())


def _handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, "HTTP_ERROR", exc.detail)


def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """500 for anything unhandled; the message is only revealed in debug mode."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app (call once after creation)."""
    app.add_exception_handler(UploaderException, _handle_uploader_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)

"""Exception handlers for the FastAPI application.

Every error leaves the API in the same envelope:
``{"error_code": ..., "message": ..., "details": ...}``.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()


def error_response(
    status_code: int, error_code: str, message: str, details: Any = None
) -> JSONResponse:
    """Build the standard error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"error_code": error_code, "message": message, "details": details},
    )


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Render domain and data-service failures."""
        server_side = exc.status_code >= 500
        (logger.error if server_side else logger.warning)(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            path=request.url.path,
        )

        # Driver messages stay in the logs once deployed
        details = exc.details
        if server_side and settings.is_production:
            details = {"request_id": _request_id(request)}

        return error_response(exc.status_code, exc.error_code.value, exc.message, details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render routing errors (404 on unknown paths, 405, ...)."""
        return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render request body and parameter validation failures field by field."""
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        logger.info("validation_error", path=request.url.path, fields=[e["field"] for e in errors])
        return error_response(
            422, ErrorCode.VALIDATION_ERROR.value, "Request validation failed", errors
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last resort for anything not raised as an AppException."""
        request_id = _request_id(request)
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "An unexpected error occurred" if settings.is_production else str(exc)
        return error_response(
            500, ErrorCode.INTERNAL_ERROR.value, message, {"request_id": request_id}
        )

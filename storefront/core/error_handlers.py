# storefront/core/error_handlers.py

import logging
import traceback
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from .exceptions import ErrorCode, StorefrontError

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds in front of the offending field name
REQUEST_PARTS = ("body", "query", "path", "form", "header", "cookie")


def error_response(
    status_code: int,
    code: str,
    message: str,
    headers: Optional[Dict[str, str]] = None,
    **details: Any,
) -> JSONResponse:
    """Every error leaves the service in the same ``{"error": {...}}`` envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, **details}},
        headers=headers,
    )


def _request_context(request: Request) -> Dict[str, Any]:
    identity = getattr(request.state, "identity", None)
    return {
        "request_id": getattr(request.state, "request_id", None),
        "request_method": request.method,
        "request_path": request.url.path,
        "username": identity.username if identity else None,
    }


def setup_error_handlers(app: FastAPI):
    """Register the storefront's exception handlers on ``app``."""

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        logger.log(
            exc.log_level,
            f"{exc.code.value} on {request.method} {request.url.path}: {exc.user_message}",
            extra={
                "error_code": exc.code.value,
                "technical_details": exc.technical_details,
                "context": exc.context,
                **_request_context(request),
            },
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Pydantic errors become one field-level message per field."""
        details = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"] if part not in REQUEST_PARTS)
            details.append({"field": field or "request", "message": error["msg"], "type": error["type"]})

        logger.warning(
            f"Validation failed on {request.method} {request.url.path}: "
            + ", ".join(d["field"] for d in details),
            extra=_request_context(request),
        )
        return error_response(422, ErrorCode.VALIDATION_ERROR.value, "Request validation failed", details=details)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
        return error_response(
            exc.status_code,
            f"HTTP_{exc.status_code}",
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning(f"Rate limit exceeded for {request.url.path}: {exc.detail}")
        return error_response(
            429,
            ErrorCode.RATE_LIMIT_EXCEEDED.value,
            f"Too many requests. Please try again later. ({exc.detail})",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}",
            extra={"traceback": traceback.format_exc(), **_request_context(request)},
        )
        # Internal details stay in the log
        return error_response(
            500,
            ErrorCode.INTERNAL_SERVER_ERROR.value,
            "An internal server error occurred. Please try again later.",
        )


async def add_request_id_middleware(request: Request, call_next):
    """Tags every request and response with an X-Request-ID."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response

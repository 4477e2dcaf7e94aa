"""Map typed errors to JSON responses. Each error kind is translated exactly once, here."""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.errors import AppError, InvalidTokenError, UnauthenticatedError
from app.services.common import duplicate_key_error

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal server error"


def _field_name(loc: tuple) -> str:
    # ("body", "email") -> "email"; ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    if parts:
        return ".".join(parts)
    return str(loc[-1]) if loc else ""


def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, InvalidTokenError):
        logger.warning(
            "Token rejected (%s) on %s %s",
            exc.reason,
            request.method,
            request.url.path,
            extra={"reason": exc.reason, "method": request.method, "path": request.url.path},
        )
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": details},
    )


def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    error = duplicate_key_error(exc)
    return JSONResponse(status_code=error.status_code, content=error.to_body())


def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """500 with a generic message; message and stack are exposed only in dev."""
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    if get_settings().is_dev:
        body = {
            "error": str(exc) or GENERIC_ERROR,
            "stack": "".join(traceback.format_exception(exc)),
        }
    else:
        body = {"error": GENERIC_ERROR}
    return JSONResponse(status_code=500, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

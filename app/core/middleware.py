"""HTTP middleware: request logging, X-Response-Time header, slow-request and memory warnings."""

import logging
import time
import tracemalloc
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response

from app.core.config import Settings

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]


def format_duration(duration_ms: float) -> str:
    return f"{round(duration_ms)}ms"


def traced_memory_bytes() -> int:
    """Bytes currently allocated under tracemalloc; 0 when tracing is off."""
    return tracemalloc.get_traced_memory()[0]


async def log_request(request: Request, call_next: CallNext) -> Response:
    """Log method, path, client ip and user agent for each request."""
    ip = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")
    logger.info(
        "%s %s",
        request.method,
        request.url.path,
        extra={
            "method": request.method,
            "path": request.url.path,
            "ip": ip,
            "user_agent": user_agent,
        },
    )
    return await call_next(request)


def make_timing_middleware(settings: Settings) -> Callable[[Request, CallNext], Awaitable[Response]]:
    """
    Build middleware that sets X-Response-Time on every response.

    When monitoring is on (or APP_ENV=dev), requests slower than SLOW_REQUEST_MS
    are logged as warnings and the rest at debug, and a request whose traced
    allocations grow by more than HIGH_MEMORY_MB gets its own warning.
    """
    monitor = settings.PERFORMANCE_MONITORING or settings.is_dev
    if monitor and not tracemalloc.is_tracing():
        tracemalloc.start()

    async def time_request(request: Request, call_next: CallNext) -> Response:
        start = time.perf_counter()
        start_memory = traced_memory_bytes() if monitor else 0
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Response-Time"] = format_duration(duration_ms)
        if not monitor:
            return response

        memory_mb = (traced_memory_bytes() - start_memory) / 1024 / 1024
        fields = {
            "method": request.method,
            "path": request.url.path,
            "duration": format_duration(duration_ms),
            "memory_used": f"{memory_mb:.2f}MB",
            "status": response.status_code,
        }
        args = (request.method, request.url.path, fields["duration"], response.status_code)
        if duration_ms > settings.SLOW_REQUEST_MS:
            logger.warning("Slow request detected: %s %s duration=%s status=%s", *args, extra=fields)
        else:
            logger.debug("Request performance: %s %s duration=%s status=%s", *args, extra=fields)
        if memory_mb > settings.HIGH_MEMORY_MB:
            logger.warning(
                "High memory usage detected: %s memory=%s",
                request.url.path,
                fields["memory_used"],
                extra={"path": request.url.path, "memory_used": fields["memory_used"]},
            )
        return response

    return time_request


def register_middleware(app: FastAPI, settings: Settings) -> None:
    # Registered last runs first: timing wraps logging.
    app.middleware("http")(log_request)
    app.middleware("http")(make_timing_middleware(settings))

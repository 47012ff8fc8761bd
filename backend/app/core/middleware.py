"""
Portal HTTP middleware: request logging and timing, security headers and
body size limits.
"""

import time
from typing import Callable, Set
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from app.core.config import settings
from app.core.logging_config import (
    logger,
    set_request_id,
    clear_log_context,
    generate_request_id,
)


# Paths that should skip detailed logging (health checks, docs)
SKIP_LOGGING_PATHS: Set[str] = {
    "/health",
    "/",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
}


def should_skip_logging(path: str) -> bool:
    if path in SKIP_LOGGING_PATHS:
        return True
    return path.startswith("/static/")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with a correlation id.

    The id is taken from an incoming X-Request-ID header when present and
    echoed back along with X-Response-Time. Tracing context variables are
    cleared once the response is produced.
    """

    def __init__(self, app: ASGIApp, slow_request_ms: float = None):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms or settings.SLOW_REQUEST_THRESHOLD_MS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)

        path = request.url.path
        skip_logging = should_skip_logging(path)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

            if not skip_logging:
                logger.log_request(
                    request.method,
                    path,
                    response.status_code,
                    duration_ms,
                    client_ip=request.client.host if request.client else "unknown",
                )

                if duration_ms > self.slow_request_ms:
                    logger.warning(
                        f"Slow request: {request.method} {path} took {duration_ms:.2f}ms",
                        extra={
                            "event_type": "slow_request",
                            "http_path": path,
                            "duration_ms": duration_ms,
                        }
                    )

            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{request.method} {path} - {type(exc).__name__} ({duration_ms:.2f}ms)",
                exc_info=True,
                extra={
                    "event_type": "http_request_error",
                    "http_method": request.method,
                    "http_path": path,
                    "duration_ms": duration_ms,
                    "error_type": type(exc).__name__,
                }
            )
            raise

        finally:
            clear_log_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the browser hardening headers required for government portals"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Rejects bodies whose declared Content-Length exceeds max_size"""

    def __init__(self, app: ASGIApp, max_size: int = 5 * 1024 * 1024):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length")

        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            logger.warning(
                f"Request body too large: {content_length} bytes (max: {self.max_size})",
                extra={
                    "event_type": "request_too_large",
                    "content_length": int(content_length),
                    "max_size": self.max_size,
                    "http_path": request.url.path,
                }
            )
            return JSONResponse(
                status_code=413,
                content={
                    "success": False,
                    "error": {
                        "code": "REQUEST_TOO_LARGE",
                        "message": f"Request body too large. Maximum size is {self.max_size // 1024} KB",
                        "details": {"max_size": self.max_size},
                    },
                }
            )

        return await call_next(request)


__all__ = [
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "RequestSizeLimitMiddleware",
    "should_skip_logging",
    "SKIP_LOGGING_PATHS",
]

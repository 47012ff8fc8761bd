"""
Rate limiting for the portal API (slowapi).

Authenticated callers are keyed by user id, everyone else by client IP.
Login and signup carry their own stricter limits to slow password guessing.
Storage defaults to in-process memory; point RATE_LIMIT_STORAGE_URI at
redis:// when running several API workers.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging_config import logger


def get_user_identifier(request: Request) -> str:
    """Rate limit key: user id set by the auth dependency, else client IP"""
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_user_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """429 in the portal's error envelope, with a Retry-After hint"""
    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}",
        extra={"event_type": "rate_limited", "http_path": request.url.path}
    )

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": {
                "code": "RATE_LIMITED",
                "message": "Too many requests. Please slow down.",
                "details": {"limit": str(exc.detail)},
            },
        },
        headers={"Retry-After": "60"}
    )


def login_rate_limit():
    """Limit applied to POST /auth/login"""
    return limiter.limit(settings.LOGIN_RATE_LIMIT, key_func=get_remote_address)


def signup_rate_limit():
    """Limit applied to POST /auth/signup"""
    return limiter.limit(settings.SIGNUP_RATE_LIMIT, key_func=get_remote_address)

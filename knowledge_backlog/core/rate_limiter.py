"""
Rate Limiting for Knowledge Backlog API
=======================================
Implements rate limiting using slowapi. Storage defaults to in-process
memory (RATE_LIMIT_STORAGE_URI=memory://); point it at redis:// when
running several workers.

Requests are keyed by the caller identity header, falling back to the
remote address for anonymous callers.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from knowledge_backlog.core.config import settings
from knowledge_backlog.core.logging_config import logger
from knowledge_backlog.core.security import identity_from_request


def get_user_identifier(request: Request) -> str:
    """
    Get rate limit key for the caller.

    Priority:
    1. Identity header set by the proxy
    2. IP address (for anonymous callers)
    """
    identity = identity_from_request(request)
    if identity:
        return f"user:{identity.raw}"

    return f"ip:{get_remote_address(request)}"


RETRY_AFTER_SECONDS = 60


limiter = Limiter(
    key_func=get_user_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Custom handler for rate limit exceeded errors.

    Returns a JSON response with a Retry-After header.
    """
    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "detail": "Too many requests. Please slow down.",
            "limit": str(exc.detail),
            "retry_after_seconds": RETRY_AFTER_SECONDS,
        },
        headers={
            "Retry-After": str(RETRY_AFTER_SECONDS),
            "X-RateLimit-Limit": str(settings.RATE_LIMIT_PER_MINUTE),
        }
    )

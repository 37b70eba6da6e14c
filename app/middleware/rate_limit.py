"""Rate limiting middleware using slowapi for abuse prevention."""

import json

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address


def get_client_ip(request: Request) -> str:
    """
    Get the client IP address from the request.

    Only trusts X-Forwarded-For header from configured trusted proxies
    to prevent IP spoofing attacks.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address string
    """
    from app.config import get_settings

    direct_ip: str = get_remote_address(request)

    # Check trusted proxies
    settings = get_settings()
    if not settings.trusted_proxies:
        return direct_ip  # Prevent spoofing

    # Parse trusted proxy list
    trusted_proxy_list = [
        ip.strip() for ip in settings.trusted_proxies.split(",")
        if ip.strip()
    ]

    # Only trust X-Forwarded-For if from trusted proxy
    if direct_ip in trusted_proxy_list:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

    return direct_ip


# In-memory storage, keyed by client IP. Counters reset on restart and are
# not shared between workers.
limiter = Limiter(key_func=get_client_ip, default_limits=["200/minute"])


# Fixed rate limits for read endpoints. The classify limit is configurable,
# see classify_rate_limit().
RATE_LIMITS = {
    "stats": "100/minute",  # GET /api/stats/* - Read operations
}


def classify_rate_limit() -> str:
    """Limit for POST /api/classify-document, read from settings at request time."""
    from app.config import get_settings

    # slowapi calls this on every request, so a changed setting applies
    # without re-decorating the route
    return get_settings().classify_rate_limit


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    Custom handler for rate limit exceeded errors.

    Returns 429 Too Many Requests with appropriate headers:
    - Retry-After: Seconds until the rate limit resets
    - X-RateLimit-Limit: The rate limit that was exceeded
    - X-RateLimit-Remaining: Always 0 when exceeded

    Args:
        request: FastAPI request object
        exc: RateLimitExceeded exception with limit details

    Returns:
        Response with 429 status code and rate limit headers
    """
    # slowapi does not always expose retry_after on the exception
    retry_after = getattr(exc, "retry_after", 60)  # Default to 60 seconds

    # Same envelope as the classify endpoint errors, plus retry details
    error_body = {
        "detail": "Rate limit exceeded",
        "message": f"Too many requests. Please retry after {retry_after} seconds.",
        "retry_after": retry_after,
        "success": False,
    }

    response = Response(
        content=json.dumps(error_body),
        status_code=429,
        media_type="application/json",
    )

    # Add rate limit headers
    response.headers["Retry-After"] = str(retry_after)
    response.headers["X-RateLimit-Remaining"] = "0"

    # Add the limit that was exceeded if available
    if hasattr(exc, "detail") and exc.detail:
        response.headers["X-RateLimit-Limit"] = exc.detail

    return response


def get_limiter() -> Limiter:
    """
    Get the configured limiter instance.

    This function returns the module-level limiter instance,
    allowing it to be used by route decorators.

    Returns:
        Configured Limiter instance
    """
    return limiter

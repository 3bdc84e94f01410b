"""Security headers and rate limits."""

from collections.abc import Callable

from fastapi import Request
from fastapi.responses import Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from academy.config.settings import get_settings


# In-memory, per client address; off in the test environment
limiter = Limiter(key_func=get_remote_address, enabled=get_settings().ENVIRONMENT != "test")

auth_rate_limit = limiter.limit("5/minute")
# A reader switching units quickly sends several behaviour events per switch
tracking_rate_limit = limiter.limit("240/minute")


class SimpleSecurityMiddleware(BaseHTTPMiddleware):
    """Adds security headers; responses to authenticated requests are never cached."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if "authorization" in request.headers:
            response.headers.setdefault("Cache-Control", "no-store")

        return response

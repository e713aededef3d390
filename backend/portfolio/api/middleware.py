"""Request Middleware — API-wide rate limiting.

Invariants:
    - Only paths under /api/ are counted
    - An exhausted client gets 429 + the fixed envelope before any route runs
    - Successful API responses carry X-RateLimit-Limit / X-RateLimit-Remaining

Design Decisions:
    - Middleware returns the 429 itself: exceptions raised here bypass the
      app's exception handlers, which sit inside the middleware stack
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from portfolio.api.dependencies import client_address
from portfolio.core.errors import RateLimitExceededError
from portfolio.infrastructure.rate_limit import FixedWindowRateLimiter


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self, app, limiter: FixedWindowRateLimiter, path_prefix: str = "/api/",
    ):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client = client_address(request)
        try:
            self.limiter.hit(client)
        except RateLimitExceededError as exc:
            return rate_limited_response(exc)

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.limit)
        response.headers["X-RateLimit-Remaining"] = str(
            self.limiter.remaining(client),
        )
        return response


def rate_limited_response(exc: RateLimitExceededError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(),
        headers={"Retry-After": str(exc.context.retry_after_seconds)},
    )

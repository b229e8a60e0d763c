"""
HTTP middleware: request context and logging, metrics, security headers
and rate limiting.
"""

import time
import uuid
from typing import Callable, Iterable

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .core.rate_limiter import RateLimiter
from .domain.exceptions import ExceptionFactory
from .metrics import rate_limit_rejections_total

logger = structlog.get_logger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def _endpoint_label(request: Request) -> str:
    # Route template keeps metric cardinality bounded (/projects/{project_id})
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the log context and log each completed request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or f"req-{uuid.uuid4().hex[:16]}"
        structlog.contextvars.bind_contextvars(request_id=request_id)
        start_time = time.time()

        try:
            response = await call_next(request)
            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round(duration_ms, 2),
                client_ip=request.client.host if request.client else None,
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Track Prometheus metrics for all HTTP requests.

    Tracks:
    - Request count by method, endpoint, and status code
    - Request duration by method and endpoint
    """

    def __init__(self, app, track_func: Callable):
        super().__init__(app)
        self.track_func = track_func

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        response = await call_next(request)
        self.track_func(
            method=request.method,
            endpoint=_endpoint_label(request),
            status_code=response.status_code,
            duration=time.time() - start_time,
        )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add standard hardening headers to every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject clients that exceed the limiter's budget.

    The limiter is injected by the application factory; exempt paths
    (health and metrics) are never counted.
    """

    def __init__(self, app, limiter: RateLimiter, exempt_paths: Iterable[str] = ()):
        super().__init__(app)
        self.limiter = limiter
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_id = self.limiter.get_client_id(request)
        is_allowed, retry_after = self.limiter.check(client_id)

        if not is_allowed:
            rate_limit_rejections_total.inc()
            exc = ExceptionFactory.request_too_frequent(
                "Rate limit exceeded. Please try again later."
            )
            return JSONResponse(
                status_code=429,
                content={"success": False, **exc.to_dict()},
                headers={"Retry-After": str(retry_after), "X-RateLimit-Remaining": "0"},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Remaining"] = str(self.limiter.get_remaining(client_id))
        return response

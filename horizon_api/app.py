"""
Horizon API - Main FastAPI Application.

Composition root: wires settings, logging, database, the signing key,
middleware, error translation and routers together.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, settings
from .core.rate_limiter import RateLimitConfig, RateLimiter
from .core.signer import MessageSigner
from .database import engine, init_db
from .dependencies import set_user_service
from .domain.exceptions import DomainException, ExceptionCode, ExceptionFactory
from .logging_config import setup_logging
from .metrics import metrics_endpoint, track_request_metrics
from .middleware import (
    PrometheusMiddleware,
    RateLimitMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)
from .routers import health_router, project_router, user_router
from .services.user_service import UserService

setup_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
logger = structlog.get_logger(__name__)

# Domain codes are not HTTP statuses; this table is the only translation.
HTTP_STATUS_BY_CODE = {
    ExceptionCode.INVALID_PARAMETERS: status.HTTP_400_BAD_REQUEST,
    ExceptionCode.NO_PERMISSION: status.HTTP_403_FORBIDDEN,
    ExceptionCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ExceptionCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ExceptionCode.VERIFICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ExceptionCode.DATA_DUPLICATION: status.HTTP_409_CONFLICT,
    ExceptionCode.REQUEST_TOO_FREQUENT: status.HTTP_429_TOO_MANY_REQUESTS,
    ExceptionCode.FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ExceptionCode.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ExceptionCode.PRIVATE_KEY_EXISTS: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ExceptionCode.PRIVATE_KEY_NOT_EXISTS: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

RATE_LIMIT_EXEMPT_PATHS = ("/health", "/metrics")


def http_status_for(exc: DomainException) -> int:
    return HTTP_STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def domain_error_response(exc: DomainException) -> JSONResponse:
    return JSONResponse(
        status_code=http_status_for(exc),
        content={"success": False, **exc.to_dict()},
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ExceptionCode.INVALID_PARAMETERS.message

    first = errors[0]
    ctx = first.get("ctx") or {}
    if "error" in ctx:
        return str(ctx["error"])

    location = ".".join(str(part) for part in first.get("loc", ())[1:])
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain, validation and unexpected errors into JSON responses."""

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        logger.warning(
            "Domain error",
            path=request.url.path,
            method=request.method,
            code=exc.code.name,
            error=exc.message,
        )
        return domain_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        domain_exc = ExceptionFactory.invalid_parameters(_validation_message(exc))
        logger.info(
            "Request validation failed",
            path=request.url.path,
            method=request.method,
            error=domain_exc.message,
        )
        return domain_error_response(domain_exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        content = {"error": exc.detail}
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            content["message"] = f"Route {request.url.path} not found"
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions."""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": "internal_server_error",
                "message": "An unexpected error occurred",
                "request_id": request.headers.get("X-Request-ID"),
            },
        )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Each call gets its own rate limiter; the signing key is loaded during
    startup so a missing key stops the service before it serves traffic.
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting Horizon API...", service=app_settings.APP_NAME, debug=app_settings.DEBUG)

        missing = app_settings.validate_required()
        if missing:
            logger.error("Missing required configuration", missing=missing)
            raise ExceptionFactory.private_key_not_exists(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        init_db()
        logger.info("Database initialized")

        signer = MessageSigner(app_settings.OWNER_PRIVATE_KEY)
        set_user_service(UserService(signer))
        logger.info("Services initialized", signer_address=signer.get_address())

        yield

        logger.info("Shutting down Horizon API...")
        set_user_service(None)
        engine.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Project records and message-signing API",
        version=__version__,
        docs_url="/api/docs" if app_settings.DEBUG else None,
        redoc_url="/api/redoc" if app_settings.DEBUG else None,
        lifespan=lifespan,
    )

    limiter = RateLimiter(
        RateLimitConfig(
            max_requests=app_settings.RATE_LIMIT_MAX_REQUESTS,
            window_seconds=app_settings.RATE_LIMIT_WINDOW_SECONDS,
        )
    )
    app.state.rate_limiter = limiter

    # Last added runs first
    app.add_middleware(RateLimitMiddleware, limiter=limiter, exempt_paths=RATE_LIMIT_EXEMPT_PATHS)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(PrometheusMiddleware, track_func=track_request_metrics)
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router.router)
    app.include_router(project_router.router)
    app.include_router(user_router.router)

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Prometheus metrics endpoint."""
        return await metrics_endpoint()

    @app.get("/")
    async def root() -> dict:
        """Root endpoint with service information."""
        return {
            "service": app_settings.APP_NAME,
            "version": __version__,
            "status": "active",
            "health": "/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("horizon_api.app:app", host=settings.HOST, port=settings.PORT, log_level="info")

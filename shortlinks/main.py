"""Short Links Service - Main FastAPI Application.

Maps long URLs to short identifiers and back:
- Create short links (POST /shorten, deprecated alias POST /shortenUrl)
- Redirect to original URLs (GET /{link_id})
- Health check (GET /health)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from .core.config import Settings, settings
from .core.errors import ErrorKind, ShortenerError
from .core.logging_config import configure_logging
from .core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
)
from .core.rate_limit import limiter
from .services.shortener import ShortenerService
from .api.routes import health_router, links_router

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


def error_body(message: str, details: Optional[str] = None) -> dict:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return body


def render_error(exc: ShortenerError, config: Settings) -> JSONResponse:
    """Render a ShortenerError as the JSON error response for its kind."""
    if exc.kind in (ErrorKind.ALLOCATION, ErrorKind.INTERNAL):
        cause = exc.reason if exc.kind is ErrorKind.INTERNAL else exc.message
        details = cause if config.is_development else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("Internal server error", details),
        )

    body = error_body(exc.message)
    headers = None
    if exc.retry_after is not None:
        body["retryAfter"] = exc.retry_after
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


def register_exception_handlers(app: FastAPI, config: Settings) -> None:
    """Map failures to HTTP responses."""

    @app.exception_handler(ShortenerError)
    async def shortener_error_handler(request: Request, exc: ShortenerError):
        if exc.kind in (ErrorKind.ALLOCATION, ErrorKind.INTERNAL):
            logger.error(f"{exc.kind.value} error on {request.url.path}: {exc.message} ({exc.reason})")
        else:
            logger.info(f"{exc.kind.value} error on {request.url.path}: {exc.message}")
        return render_error(exc, config)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        client_ip = request.client.host if request.client else "unknown"
        logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}: {exc.detail}")
        error = ShortenerError.rate_limited(exc.limit.limit.get_expiry())
        return render_error(error, config)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            message = "Invalid JSON format"
        else:
            message = "Invalid request body"
        logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content=error_body(message))


def create_app(config: Settings = settings) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Settings instance. The link service, error rendering and
            CORS policy of the app are all built from it.

    Returns:
        Configured FastAPI app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup and shutdown events."""
        # Startup
        logger.info(f"Starting {config.app_title}...")
        service = ShortenerService.from_settings(config)
        app.state.service = service
        logger.info(f"Link store ready: {type(service.store).__name__}")
        yield
        # Shutdown
        logger.info(f"Shutting down {config.app_title}...")
        service.store.close()
        app.state.service = None

    app = FastAPI(
        title=config.app_title,
        description=config.app_description,
        version=config.app_version,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.service = None
    app.state.limiter = limiter
    register_exception_handlers(app, config)

    # Added first so it sits inside the logging and security header middleware
    app.add_middleware(
        UnhandledErrorMiddleware,
        render=lambda exc: render_error(ShortenerError.internal(str(exc)), config),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Health first so "/health" is not captured by "/{link_id}"
    app.include_router(health_router)
    app.include_router(links_router)
    return app


app = create_app()

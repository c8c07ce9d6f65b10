"""FastAPI application entry point."""

import logging
import time
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nextflix_api import __version__
from nextflix_api.api import api_router
from nextflix_api.config import Settings, get_settings
from nextflix_api.logging_config import configure_logging
from nextflix_api.schemas.errors import ErrorResponse, HealthResponse
from nextflix_api.services.base import APIError, RateLimitError
from nextflix_api.services.cache import ResponseCache
from nextflix_api.services.movies import MovieService
from nextflix_api.services.provider import create_movie_provider
from nextflix_api.services.rate_limit import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _request_target(request: Request) -> str:
    """Path plus query string, as the client sent it."""
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: str,
    headers: dict[str, str] | None = None,
    exc: Exception | None = None,
) -> JSONResponse:
    """Render the uniform error envelope.

    5xx errors are logged at ERROR with the exception attached, 4xx errors at
    WARNING.
    """
    if status_code >= 500:
        logger.error(
            "%s %s - %s", request.method, request.url.path, message, exc_info=exc
        )
    else:
        logger.warning("%s %s - %s", request.method, request.url.path, message)

    body = ErrorResponse(
        status_code=status_code,
        message=message,
        error_code=error_code,
        timestamp=_utc_timestamp(),
        path=_request_target(request),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
        headers=headers,
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions globally."""
    headers = {}
    if isinstance(exc, RateLimitError) and exc.retry_after:
        headers["Retry-After"] = str(exc.retry_after)
    return error_response(
        request,
        status_code=exc.status_code or 500,
        message=str(exc) or "External API error",
        error_code=exc.error_code,
        headers=headers,
        exc=exc,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report invalid request parameters as 400 with a readable message."""
    messages = []
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        if loc and loc[0] in ("query", "path", "header", "body"):
            loc = loc[1:]
        location = ".".join(str(part) for part in loc)
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return error_response(
        request,
        status_code=400,
        message="; ".join(messages) or "Invalid request parameters",
        error_code="VALIDATION_ERROR",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, wrong method) in the envelope."""
    return error_response(
        request,
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code=f"HTTP_{exc.status_code}",
        headers=exc.headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unclassified failures.

    Runs outside the request middleware, so it sets the request-id and
    security headers itself.
    """
    headers = dict(SECURITY_HEADERS)
    request_id = _request_id(request)
    if request_id:
        headers["X-Request-ID"] = request_id
    return error_response(
        request,
        status_code=500,
        message="Internal server error",
        error_code="INTERNAL_SERVER_ERROR",
        headers=headers,
        exc=exc,
    )


def build_request_middleware(
    app_logger: logging.Logger,
) -> Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]:
    """Log each request and attach request-id and security headers."""

    async def middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.monotonic()
        request_id = (request.headers.get("x-request-id") or "").strip() or uuid.uuid4().hex
        request.state.request_id = request_id

        # Unhandled errors escape call_next and are rendered further out as 500s
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration_ms = int((time.monotonic() - start) * 1000)
            app_logger.info(
                "%s %s | Status: %s | Duration: %dms | Request ID: %s",
                request.method,
                request.url.path,
                status_code,
                duration_ms,
                request_id,
            )

        response.headers["X-Request-ID"] = request_id
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    return middleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - runs on startup and shutdown."""
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Movie provider: %s", settings.movie_provider)
    logger.info(
        "Cache: ttl=%ss, max_entries=%s", settings.cache_ttl, settings.cache_max_entries
    )

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")
    await app.state.movie_service.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application and its owned movie service, cache and limiter."""
    settings = settings or get_settings()
    app_logger = configure_logging(settings)
    prefix = f"/{settings.api_prefix}" if settings.api_prefix else ""

    app = FastAPI(
        title=settings.app_name,
        description="Movie search, discovery and detail lookup backed by TMDB or OMDB",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url=f"{prefix}/docs",
        redoc_url=None,
        openapi_url=f"{prefix}/swagger.json",
    )

    app.state.settings = settings
    app.state.movie_service = MovieService(
        provider=create_movie_provider(settings),
        cache=ResponseCache(ttl=settings.cache_ttl, max_entries=settings.cache_max_entries),
    )
    app.state.rate_limiter = SlidingWindowRateLimiter(
        limit=settings.throttle_limit, window=settings.throttle_ttl
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
        max_age=86400,
    )
    app.middleware("http")(build_request_middleware(app_logger))

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include API router
    app.include_router(api_router, prefix=prefix)

    async def health_check() -> HealthResponse:
        """Health check endpoint to verify the API is running."""
        return HealthResponse(status="ok", timestamp=_utc_timestamp(), version=__version__)

    # Served at the root for load balancers and under the prefix alongside the API
    app.add_api_route("/health", health_check, response_model=HealthResponse, tags=["health"])
    if prefix:
        app.add_api_route(
            f"{prefix}/health", health_check, response_model=HealthResponse, tags=["health"]
        )

    return app


app = create_app()

"""FastAPI application creation and configuration.

This module creates and configures the FastAPI application instance.
It registers exception handlers, CORS and request-id middleware, and routes.

State:
- Each app owns one InMemoryStore and one RandomSource on app.state
- Passing a store, random source or settings into create_app() gives tests
  an isolated, reproducible instance

Middleware Ordering (Critical):
- Middleware runs in reverse order of registration
- RequestIDMiddleware is added LAST so it runs FIRST (outermost)
- This ensures all responses (including CORS rejections) get X-Request-ID

Actual execution order per request:
1. RequestIDMiddleware (sets request_id, starts timer)
2. ApiCORSMiddleware (origin check, preflight, response headers)
3. Route handler
4. RequestIDMiddleware (logs, sets response header)
"""

import json
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from arena.api.routes import create_api_router
from arena.config import Settings, get_settings
from arena.errors import ApiError, ApiErrorCode
from arena.logging import configure_logging, get_logger
from arena.middleware.cors import ApiCORSMiddleware
from arena.middleware.request_id import RequestIDMiddleware
from arena.responses import (
    api_error_handler,
    error_response,
    http_exception_handler,
    unhandled_exception_handler,
)
from arena.services.randomness import RandomSource
from arena.services.seed import seed_demo_data
from arena.store import InMemoryStore

# Configure structured logging at import time
configure_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log application startup and shutdown."""
    settings: Settings = app.state.settings
    logger.info(
        "app_started",
        env=settings.arena_env.value,
        random_seed=app.state.random_source.seed,
        demo_data=settings.seed_demo_data,
    )
    yield
    logger.info("app_stopped")


def create_app(
    store: InMemoryStore | None = None,
    random_source: RandomSource | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Entity store to serve from (a fresh one when omitted).
        random_source: Shared random source (seeded from ARENA_RANDOM_SEED when omitted).
        settings: Settings override (for testing); replaces get_settings for routes.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()
    if not settings.log_json:
        configure_logging(json_format=False)

    app = FastAPI(
        title="Arena API",
        description="Mock backend for a side-by-side model comparison arena",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store if store is not None else InMemoryStore()
    app.state.random_source = (
        random_source if random_source is not None else RandomSource(settings.arena_random_seed)
    )
    app.dependency_overrides[get_settings] = lambda: settings

    app.state.demo = None
    if settings.seed_demo_data:
        app.state.demo = seed_demo_data(app.state.store, app.state.random_source)

    # Register exception handlers
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation errors (bad ids, wrong body types)."""
        return JSONResponse(
            status_code=400,
            content=error_response(ApiErrorCode.E_INVALID_REQUEST, "Invalid request"),
        )

    @app.middleware("http")
    async def catch_json_decode_errors(request: Request, call_next):
        """Catch JSON decode errors before they reach route handlers."""
        if request.method in ("POST", "PUT", "PATCH"):
            content_type = request.headers.get("content-type", "")
            if "application/json" in content_type:
                body = await request.body()
                if body:
                    try:
                        json.loads(body)
                    except json.JSONDecodeError:
                        return JSONResponse(
                            status_code=400,
                            content=error_response(
                                ApiErrorCode.E_INVALID_REQUEST, "Malformed JSON body"
                            ),
                        )
        return await call_next(request)

    app.include_router(create_api_router())

    cors_origins = settings.cors_origin_list
    if cors_origins:
        app.add_middleware(ApiCORSMiddleware, allowed_origins=cors_origins)
        logger.info("cors_middleware_enabled", origins=cors_origins)

    return app


def add_request_id_middleware(app: FastAPI, log_requests: bool = True) -> None:
    """Add request-id middleware to the app.

    This should be called AFTER all other middleware is added, so it runs FIRST.

    Args:
        app: The FastAPI application.
        log_requests: Whether to log access entries for each request.
    """
    app.add_middleware(RequestIDMiddleware, log_requests=log_requests)
    logger.info("request_id_middleware_enabled")

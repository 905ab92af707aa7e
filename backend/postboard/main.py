"""
Postboard Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers, routes and the
       lifespan; the module-level `app` is what uvicorn serves
       (uvicorn postboard.main:app, or run()).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌─────────┐ ┌────────┐  │
    │  │  CORS    │→│ Req ID   │→│ Logging │→│ GZip   │  │
    │  └──────────┘ └──────────┘ └─────────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  GET/POST /api/posts   PUT/DELETE /api/posts/{id}   │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Store→500          │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build PostStore from settings and connect it
       (StoreConnectionError is logged and re-raised: the server never starts)
    3. Attach the store to app.state for get_post_store()

    Shutdown:
    1. Close the store (dispose the engine and its pool)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from postboard import __version__
from postboard.config import Settings
from postboard.exceptions import (
    NotFoundError,
    PostboardError,
    StoreConnectionError,
    StoreError,
    ValidationError,
)
from postboard.middleware.logging import RequestLoggingMiddleware
from postboard.middleware.request_id import RequestIDMiddleware, request_id_var
from postboard.routes import posts
from postboard.services.post_store import PostStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output goes to stdout so containers and process managers capture it.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def build_post_store(settings: Settings) -> PostStore:
    """PostStore configured from application settings."""
    return PostStore(
        settings.database_url,
        timeout=settings.store_timeout_seconds,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        echo=settings.log_level == "DEBUG",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the store before serving and close it on shutdown.

    A store that cannot be reached is a startup failure, not a per-request
    error: the exception leaves the lifespan and uvicorn exits.
    """
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("Postboard Backend %s starting up...", __version__)

    store = build_post_store(settings)
    try:
        await store.connect()
    except StoreConnectionError as e:
        logger.critical("Store unavailable, refusing to start: %s | Context: %s", e.message, e.context)
        raise

    app.state.post_store = store
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Postboard Backend shutting down...")
    await store.close()
    app.state.post_store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

BODY_SHAPE_MESSAGE = "Request body must be a JSON object with string fields 'title' and 'content'"


def _invalid_fields(exc: RequestValidationError) -> list:
    """
    Body field names named by a RequestValidationError.

    Malformed JSON is reported at ("body", <byte offset>); only string
    locations are field names.
    """
    fields = set()
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            continue
        loc = error.get("loc", ())
        if len(loc) > 1 and loc[0] == "body" and isinstance(loc[1], str):
            fields.add(loc[1])
    return sorted(fields)


def to_validation_error(exc: RequestValidationError) -> ValidationError:
    """Restate FastAPI's body validation failure as the application's ValidationError."""
    return ValidationError(message=BODY_SHAPE_MESSAGE, context={"fields": _invalid_fields(exc)})


def _validation_response(exc: ValidationError) -> JSONResponse:
    rid = request_id_var.get("")
    logger.warning("[%s] Validation error: %s | Details: %s", rid, exc.message, exc.context)
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": exc.message,
            "details": exc.context,
            "request_id": rid,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and a uniform JSON body.

    Handler hierarchy:
        RequestValidationError  → restated as ValidationError
        ValidationError         → 400 Bad Request
        NotFoundError           → 404 Not Found
        StoreError              → 500 Internal Server Error ("Server error")
        PostboardError (base)   → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Store details (error types, operation names) are logged, never returned.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body missing, not JSON, or title/content absent or not strings."""
        return _validation_response(to_validation_error(exc))

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        return _validation_response(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        """Store failure: fixed message to the client, context to the log."""
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "Server error",
                "request_id": rid,
            },
        )

    @app.exception_handler(PostboardError)
    async def handle_app_error(request: Request, exc: PostboardError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "Server error",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: stack trace goes to the log only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "Server error",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to postboard.config.settings,
            which requires DATABASE_URL in the environment.
    """
    if settings is None:
        from postboard.config import settings as default_settings
        settings = default_settings

    app = FastAPI(
        title="Postboard API",
        description="Create, list, update and delete posts.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.post_store = None

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: CORS → RequestID → Logging → GZip → routes
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(posts.router)

    return app


def run() -> None:
    """Serve the module-level app with uvicorn on the configured host/port."""
    import uvicorn

    from postboard.config import settings

    uvicorn.run(
        "postboard.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


app = create_app()

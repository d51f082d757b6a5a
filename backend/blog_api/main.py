"""
Blog API — FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routes, and
       binds the Database handle's lifecycle to the app lifespan.
Who:   uvicorn (blog_api.main:app), the `blog-api` console script, tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  Request ID → Logging → CORS            │
    │                                                      │
    │  Routes:      /api/blogs  (GET, POST)                │
    │               /api/blogs/{id}  (GET, PATCH, DELETE)  │
    │                                                      │
    │  Exception Handlers:                                 │
    │    ValidationError→400 │ NotFound→404 │ DB→500       │
    │    unmatched route→404 "Endpoint not found"          │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → database connect (+ create tables) → ready
    Shutdown: dispose the engine the app created
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api import __version__
from blog_api.config import settings
from blog_api.database import Database
from blog_api.exceptions import BlogApiError
from blog_api.middleware.logging import RequestLoggingMiddleware
from blog_api.middleware.request_id import RequestIDMiddleware, request_id_var
from blog_api.routes import blogs

logger = logging.getLogger(__name__)

ENDPOINT_NOT_FOUND = "Endpoint not found"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once from the lifespan, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware already logs each request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup and shutdown of the store handle.

    A Database passed to create_app() is used as-is and left open on
    shutdown (its owner disposes it). Otherwise one is built from settings,
    and a failed connection aborts startup.
    """
    setup_logging()
    logger.info("Blog API %s starting up...", __version__)

    owns_database = app.state.database is None
    if owns_database:
        app.state.database = Database.from_settings(settings)

    database: Database = app.state.database
    try:
        await database.connect(create_tables=settings.db_create_tables)
    except Exception:
        logger.error("Failed to connect to the database", exc_info=True)
        if owns_database:
            await database.dispose()
        raise

    logger.info("Server ready on port %d", settings.port)

    yield

    logger.info("Blog API shutting down...")
    if owns_database:
        await database.dispose()
        app.state.database = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

    Handler hierarchy:
        BlogApiError subclasses  → their status_code (400 / 404 / 500)
        HTTPException 404/405    → 404 "Endpoint not found"
        RequestValidationError   → 400 (body is not a JSON object)
        Exception (fallback)     → 500

    Every body is {"message": ...}.
    """

    @app.exception_handler(BlogApiError)
    async def handle_blog_api_error(request: Request, exc: BlogApiError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # 405 means the path exists but not for this method; both are "no such endpoint"
        if exc.status_code in (404, 405):
            return _error(404, ENDPOINT_NOT_FOUND)
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        details = "; ".join(str(err.get("msg", "")) for err in exc.errors())
        message = f"Invalid request body: {details}" if details else "Invalid request body"
        logger.warning("[%s] %s", rid, message)
        return _error(400, message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error(500, str(exc) or "Internal Server Error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Store handle to serve requests from. When omitted the
                  lifespan builds one from settings at startup.
    """
    app = FastAPI(
        title="Blog API",
        description="Create, read, update and delete blog posts.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(blogs.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)

"""
Shopfront Backend: FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the store handle (engine + session factory),
       registers middleware, exception handlers and routers, and returns
       the configured app.
Who:   uvicorn (uvicorn shopfront.main:app) and the test-suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  app.state: settings · engine · session_factory     │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐         │
    │  │ Req ID   │→│ Logging │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  /api/products · /api/categories · /api/tags        │
    │  /health                                            │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ DB/other→500       │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the effective database and prefix
    Shutdown: dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url

from shopfront import __version__
from shopfront.config import Settings, settings as default_settings
from shopfront.database import build_engine, build_session_factory, dispose_engine
from shopfront.exceptions import (
    DatabaseError,
    NotFoundError,
    ShopfrontError,
    ValidationError,
)
from shopfront.middleware.logging import RequestLoggingMiddleware
from shopfront.middleware.request_id import RequestIDMiddleware, request_id_var
from shopfront.routes import categories, health, products, tags

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout.
    Called once at startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # These log every request / statement at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("Shopfront Backend %s starting up...", __version__)
    # Password is masked by render_as_string(hide_password=True)
    logger.info("Database: %s", make_url(settings.database_url).render_as_string(hide_password=True))
    logger.info("API prefix: %s", settings.api_prefix or "/")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Shopfront Backend shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        ValidationError        → 400 Bad Request
        NotFoundError          → 404 Not Found
        DatabaseError          → 500 Internal Server Error (generic message)
        ShopfrontError (base)  → 500 Internal Server Error
        Exception (fallback)   → 500 Internal Server Error

    Error bodies never include stack traces or SQL; those are logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

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

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(ShopfrontError)
    async def handle_application_error(request: Request, exc: ShopfrontError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
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
        settings: Explicit configuration; defaults to the environment-loaded
                  `shopfront.config.settings`.

    Returns:
        Fully configured FastAPI instance. Its engine and session factory are
        on `app.state` and are handed to handlers through get_db_session().
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Shopfront API",
        description="Product catalogue service: products, categories and tags.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Store Handle ──────────────────────────────────────────────────────
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(products.router, prefix=settings.api_prefix)
    app.include_router(categories.router, prefix=settings.api_prefix)
    app.include_router(tags.router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


# uvicorn expects `shopfront.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "shopfront.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_config=None,
    )

"""
Travel Sample API — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       exception handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  Request ID → Logging → GZip → CORS     │
    │                                                      │
    │  Routers (/api/v1):                                  │
    │    airline   airport   route   hotel   + /health     │
    │                                                      │
    │  Exception Handlers:                                 │
    │    ValidationError / RequestValidationError → 400    │
    │    MissingFilterError → 400   NotFoundError → 404    │
    │    ConflictError → 409        DatabaseError → 500    │
    │                                                      │
    │  app.state.store: one CouchbaseStore per process     │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Validate connection settings (logged, not fatal)
    3. Provision the hotel search index if it is missing

    Shutdown:
    1. Close the Couchbase connection
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

from app import __version__
from app.config import settings
from app.database import CouchbaseStore
from app.exceptions import (
    ConflictError,
    DatabaseError,
    MissingFilterError,
    NotFoundError,
    TravelAPIError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import airline, airport, health, hotel, route
from app.schemas.common import format_errors
from app.services.search_index import ensure_search_indexes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("couchbase").setLevel(logging.WARNING)
    logging.getLogger("acouchbase").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Travel Sample API starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health reports the store as disconnected
        logger.error("Configuration error: %s", str(e))

    store: CouchbaseStore = app.state.store
    if settings.provision_search_index:
        created = await ensure_search_indexes(store, settings.search_index_file)
        if created:
            logger.info("Provisioned search indexes: %s", ", ".join(created))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Travel Sample API shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to status codes and the shared JSON envelope.

    Envelope:
        Every failure carries `message`. Validation failures add `error` with
        the violation list; 404 and 409 add `error` mirroring `message`.

    Security: handlers never expose store errors or stack traces in the
    response. Details are logged server-side with the request ID.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.info("[%s] Validation error: %d violation(s)", rid, len(exc.errors))
        return JSONResponse(
            status_code=400,
            content={"message": exc.message, "error": exc.errors},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed JSON or a missing body: same 400 envelope as schema failures."""
        rid = request_id_var.get("")
        logger.info("[%s] Request could not be parsed: %s", rid, request.url.path)
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request body", "error": format_errors(exc.errors())},
        )

    @app.exception_handler(MissingFilterError)
    async def handle_missing_filter(request: Request, exc: MissingFilterError):
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={"message": exc.message, "error": exc.message},
        )

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return JSONResponse(
            status_code=409,
            content={"message": exc.message, "error": exc.message},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(TravelAPIError)
    async def handle_app_error(request: Request, exc: TravelAPIError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error on %s: %s", request.url.path, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred"},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[CouchbaseStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Store to serve requests from. Defaults to a CouchbaseStore
               built from settings; tests pass an in-memory replacement.
               The store connects lazily, so construction does no I/O.
    """
    app = FastAPI(
        title="Travel Sample API",
        description=(
            "CRUD and query endpoints over the Couchbase travel-sample dataset: "
            "airlines, airports, routes and hotels."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else CouchbaseStore(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(airline.router)
    app.include_router(airport.router)
    app.include_router(route.router)
    app.include_router(hotel.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()

"""
Biodex Backend — FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn biodex.main:app`) and the API tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │  Routes:      /api/species  /api/profiles  /health  │
    │  Handlers:    400 │ 401 │ 403 │ 404 │ 500           │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the bind address
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from biodex.config import settings
from biodex.database import dispose_engine
from biodex.exceptions import (
    DatabaseError,
    NotFoundError,
    PermissionDeniedError,
    UnauthenticatedError,
    ValidationError,
)
from biodex.middleware.logging import RequestLoggingMiddleware
from biodex.middleware.request_id import RequestIDMiddleware, request_id_var
from biodex.routes import health, profiles, species

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during startup, before anything else logs. Third-party
    loggers that chatter on every query or request are raised to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Biodex backend starting up...")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Biodex backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def validation_error_from(exc: RequestValidationError) -> ValidationError:
    """
    Convert FastAPI's request validation failure into our ValidationError.

    `details.errors` maps each offending field to its first message, and the
    top-level message names the first one, e.g. "scientific_name: String
    should have at least 1 character".
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        # loc is ("body", field) for bodies, ("path", name) for path params
        loc = error.get("loc") or ("body",)
        errors.setdefault(str(loc[-1]), error.get("msg", "invalid value"))

    if not errors:
        return ValidationError(message="Request validation failed")
    field, msg = next(iter(errors.items()))
    return ValidationError(message=f"{field}: {msg}", field=field, context={"errors": errors})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one JSON error shape.

    Handler hierarchy:
        RequestValidationError → 400 (converted to ValidationError)
        ValidationError        → 400
        UnauthenticatedError   → 401
        PermissionDeniedError  → 403
        NotFoundError          → 404
        DatabaseError          → 500 (generic message, context logged)
        Exception (fallback)   → 500 (stack trace logged, never returned)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return await handle_validation_error(request, validation_error_from(exc))

    @app.exception_handler(UnauthenticatedError)
    async def handle_unauthenticated(request: Request, exc: UnauthenticatedError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=401,
            content={
                "error": "unauthenticated",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(PermissionDeniedError)
    async def handle_permission_denied(request: Request, exc: PermissionDeniedError):
        rid = request_id_var.get("")
        logger.warning("[%s] Permission denied: %s", rid, exc.context)
        return JSONResponse(
            status_code=403,
            content={
                "error": "permission_denied",
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

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    A factory keeps tests free to build a fresh app and override
    dependencies without touching the module-level instance.
    """
    app = FastAPI(
        title="Biodex API",
        description=(
            "Species and profile registry. Signed-in viewers browse species; "
            "authors edit or delete their own entries."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(species.router)
    app.include_router(profiles.router)
    app.include_router(health.router)

    return app


app = create_app()

"""
Snippets API — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       `app` at module level is what uvicorn serves
       (uvicorn snippets_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  CORS        │→│ Req ID   │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ * /functions/v1/snippets-api │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ 400 Validation/Store │ 401 │ 404 │ 405 │ 500  │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration, log endpoint
    Shutdown: dispose database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from snippets_api import __version__
from snippets_api.config import settings
from snippets_api.database import dispose_engine
from snippets_api.error_messages import public_message
from snippets_api.exceptions import (
    AuthenticationError,
    MethodNotAllowedError,
    NotFoundError,
    SnippetsApiError,
    StoreError,
    ValidationError,
)
from snippets_api.middleware.cors import PermissiveCORSMiddleware, cors_headers
from snippets_api.middleware.logging import RequestLoggingMiddleware
from snippets_api.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from snippets_api.routes import health, snippets

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s
    The request id comes from RequestIDLogFilter on the stdout handler.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Snippets API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: reads still work for anonymous callers
        logger.error("Configuration error: %s", str(e))

    logger.info(
        "Serving %s/%s on http://%s:%d",
        settings.api_base_path,
        settings.api_name,
        settings.backend_host,
        settings.backend_port,
    )

    yield

    logger.info("Snippets API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

_FRAMEWORK_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        ValidationError           → 400 (message as raised)
        StoreError                → 400 (message translated, detail logged)
        AuthenticationError       → 401
        NotFoundError             → 404 (missing, private or not owned)
        MethodNotAllowedError     → 405
        SnippetsApiError (base)   → 500
        HTTPException (framework) → its own status (unrouted method → 405)
        Exception (fallback)      → 500

    Every body is `{"error": <client-safe message>}`; context is only logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s | Context: %s", exc.message, exc.context)
        return _error(400, exc.message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        return _error(400, public_message(exc))

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return _error(401, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("Not found: %s", exc.context)
        return _error(404, exc.message)

    @app.exception_handler(MethodNotAllowedError)
    async def handle_method_not_allowed(request: Request, exc: MethodNotAllowedError):
        logger.warning("Method not allowed: %s", exc.context)
        return _error(405, exc.message)

    @app.exception_handler(SnippetsApiError)
    async def handle_app_error(request: Request, exc: SnippetsApiError):
        logger.error("Application error: %s | Context: %s", exc.message, exc.context)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_framework_http_error(request: Request, exc: StarletteHTTPException):
        """Raised by routing itself, e.g. a method the snippet route never accepts."""
        message = _FRAMEWORK_MESSAGES.get(exc.status_code, str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Last-resort handler for errors raised outside the snippet endpoint.

        Runs outside the middleware stack, so the CORS headers are added here.
        """
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers=cors_headers(),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Snippets API",
        description="Store, browse and share code snippets.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs first: CORS → RequestID → Logging → route
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(PermissiveCORSMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(snippets.router)

    return app


app = create_app()

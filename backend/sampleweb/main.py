"""
SampleWeb Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn sampleweb.main:app).
When:  Once at server startup; the returned app handles all requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌─────────────────┐   │
    │  │ /doA ... /doG, /redirect │ │ GET /health     │   │
    │  └──────────────────────────┘ └─────────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Binding→400 │ TemplateNotFound→404 │ else→500│   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, check the template root, log readiness.
    Shutdown: log shutdown.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sampleweb import __version__
from sampleweb.config import settings
from sampleweb.exceptions import (
    MissingRequiredParameterError,
    SampleWebError,
    TemplateNotFoundError,
    TypeCoercionError,
    ViewResolutionError,
)
from sampleweb.middleware.logging import RequestLoggingMiddleware
from sampleweb.middleware.request_id import RequestIDMiddleware, request_id_var
from sampleweb.routes import health, sample
from sampleweb.schemas.health import ErrorResponse

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    What:    Root logger to stdout with a single consistent format.
    When:    Called once during app startup, before anything else logs.

    Format: 2024-01-15T12:00:00 [INFO] sampleweb.routes.sample: doA() called
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates sampleweb.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("SampleWeb Backend %s starting up...", __version__)

    try:
        settings.validate_template_root()
    except ValueError as e:
        # Keep serving: /health reports the problem and renders fail per request
        logger.error("Configuration error: %s", str(e))

    logger.info(
        "Views: %s<name>%s under %s",
        settings.view_prefix,
        settings.view_suffix,
        settings.templates_dir,
    )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("SampleWeb Backend shutting down...")
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, exc: SampleWebError, details: bool = True) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=exc.message,
        details=exc.context if details else None,
        request_id=request_id_var.get(""),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        MissingRequiredParameterError → 400 missing_parameter
        TypeCoercionError             → 400 type_mismatch
        TemplateNotFoundError         → 404 template_not_found
        ViewResolutionError           → 500 view_resolution_error
        SampleWebError (base)         → 500 server_error
        Exception (fallback)          → 500 internal_server_error

    Every failure ends only the request that raised it.
    """

    @app.exception_handler(MissingRequiredParameterError)
    async def handle_missing_parameter(request: Request, exc: MissingRequiredParameterError):
        logger.warning("[%s] Missing parameter: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "missing_parameter", exc)

    @app.exception_handler(TypeCoercionError)
    async def handle_type_coercion(request: Request, exc: TypeCoercionError):
        logger.warning("[%s] Type mismatch: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "type_mismatch", exc)

    @app.exception_handler(TemplateNotFoundError)
    async def handle_template_not_found(request: Request, exc: TemplateNotFoundError):
        logger.warning("[%s] Template not found: %s", request_id_var.get(""), exc.template_path)
        return _error_response(404, "template_not_found", exc)

    @app.exception_handler(ViewResolutionError)
    async def handle_view_resolution(request: Request, exc: ViewResolutionError):
        logger.error("[%s] View resolution error: %s | Context: %s",
                     request_id_var.get(""), exc.message, exc.context)
        return _error_response(500, "view_resolution_error", exc, details=False)

    @app.exception_handler(SampleWebError)
    async def handle_application_error(request: Request, exc: SampleWebError):
        logger.error("[%s] Application error: %s | Context: %s",
                     request_id_var.get(""), exc.message, exc.context)
        return _error_response(500, "server_error", exc, details=False)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        body = ErrorResponse(
            error="internal_server_error",
            message="An unexpected error occurred.",
            request_id=rid,
        )
        return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="SampleWeb",
        description=(
            "Sample controller demonstrating request parameter binding, "
            "model population, and view resolution."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition: RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(sample.router)
    app.include_router(health.router)

    return app


app = create_app()

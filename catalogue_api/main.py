"""
Catalogue API - FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its store client and report service bound to `app.state`.
Who:   uvicorn (`uvicorn catalogue_api.main:app` or the `catalogue-api` script)
       and the test-suite, which passes its own Database.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Req ID → Logging → GZip → CORS        │
    │                                                     │
    │  Routes:  /categories  /produits  /dashboard        │
    │           /download-products-pdf  /health           │
    │           static files (public/) mounted last       │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ DB/Export→500      │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the reports directory, log readiness
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from catalogue_api import __version__
from catalogue_api.config import Settings, settings
from catalogue_api.database import Database
from catalogue_api.exceptions import (
    DatabaseError,
    NotFoundError,
    ReportExportError,
    ValidationError,
)
from catalogue_api.middleware.logging import RequestLoggingMiddleware
from catalogue_api.middleware.request_id import RequestIDMiddleware, request_id_var
from catalogue_api.routes import categories, dashboard, health, products, reports
from catalogue_api.services.pdf_exporter import PdfReportExporter
from catalogue_api.services.report_service import ReportService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = settings.log_level) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by the container runtime)
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("fontTools").setLevel(logging.WARNING)
    logging.getLogger("fpdf").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("Catalogue API %s starting up...", __version__)

    reports_dir = Path(app_settings.reports_dir)
    reports_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Reports directory: %s", reports_dir.resolve())

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Catalogue API shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs outside RequestIDMiddleware, after the
    # ContextVar has been reset; request.state still carries the id.
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError / InvalidReferenceError → 400 Bad Request
        RequestValidationError (body, path)     → 400 Bad Request
        NotFoundError                           → 404 Not Found
        DatabaseError                           → 500 generic message
        ReportExportError                       → 500
        Exception (fallback)                    → 500 generic message

    5xx responses never expose internal details; they are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = _request_id(request)
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
        """Body or path parameters did not match the schema."""
        rid = _request_id(request)
        errors = [
            {
                "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
                "message": error.get("msg", ""),
            }
            for error in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Données invalides",
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = _request_id(request)
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
        """Generic message to the client, details logged server-side."""
        rid = _request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "Erreur serveur",
                "request_id": rid,
            },
        )

    @app.exception_handler(ReportExportError)
    async def handle_report_export_error(request: Request, exc: ReportExportError):
        rid = _request_id(request)
        logger.error("[%s] Report export error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "report_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "Erreur serveur",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    report_service: Optional[ReportService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings:   configuration (defaults to the `settings` singleton)
        database:       store client; built from settings when omitted
        report_service: report workflow; built from settings when omitted

    Creating the Database does not open a connection, so building the app
    is free of I/O.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Catalogue API",
        description="Categories and products backed by a relational store, with a PDF product report.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.database = database or Database.from_settings(app_settings)
    app.state.report_service = report_service or ReportService(
        exporter=PdfReportExporter(title=app_settings.report_title),
        reports_dir=app_settings.reports_dir,
        filename=app_settings.report_filename,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute
    origins = app_settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
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
    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(dashboard.router)
    app.include_router(reports.router)
    app.include_router(health.router)

    # Static files last: the mount at "/" would otherwise shadow the API
    static_dir = Path(app_settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app


def run() -> None:
    """Console entry point: serve the application with uvicorn."""
    uvicorn.run(
        "catalogue_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


app = create_app()

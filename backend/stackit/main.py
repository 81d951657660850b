"""
StackIt Backend: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` registers middleware, exception handlers and routers,
       and attaches the lifespan. uvicorn serves `stackit.main:app`.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:  Request ID → Logging → GZip → CORS         │
    │                                                          │
    │  Routes:      /api/questions   /api/notifications        │
    │               /api/users       /api/tags                 │
    │               /api/auth        /health                   │
    │                                                          │
    │  Exception Handlers:                                     │
    │    Validation→400  NotFound→404  Submission→503  DB→500  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, check database connectivity when the
              database backend is selected (logged, never fatal).
    Shutdown: dispose the database engine.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from stackit import __version__
from stackit.config import settings
from stackit.database import check_connection, dispose_engine
from stackit.exceptions import (
    DatabaseError,
    NotFoundError,
    StackItError,
    SubmissionError,
    ValidationError,
)
from stackit.middleware.logging import RequestLoggingMiddleware
from stackit.middleware.request_id import (
    RequestContextFilter,
    RequestIDMiddleware,
    request_id_var,
)
from stackit.routes import auth, health, notifications, questions, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s user=%(user_id)s]: %(message)s
    Output goes to stdout, where the container runtime collects it. Outside a
    request (startup, shutdown) both fields read "-".
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s user=%(user_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Per-operation chatter from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("StackIt Backend %s starting up...", __version__)
    logger.info("Repository backend: %s", settings.repository_backend)

    if settings.uses_database:
        if await check_connection():
            logger.info("Database connected")
        else:
            # Keep serving: /health reports the outage
            logger.error("Database connection failed; requests touching storage will fail")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("StackIt Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to JSON error responses.

        ValidationError   → 400 (message shown inline by the client)
        NotFoundError     → 404
        SubmissionError   → 503 with Retry-After
        DatabaseError     → 500, generic message
        StackItError      → 500, generic message
        Exception         → 500, generic message

    Server-side errors log their context; the response never includes it.
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

    @app.exception_handler(SubmissionError)
    async def handle_submission_error(request: Request, exc: SubmissionError):
        rid = request_id_var.get("")
        logger.error("[%s] Submission failed: %s | Context: %s", rid, exc.message, exc.context)
        headers = {}
        if exc.retry_after:
            headers["Retry-After"] = str(exc.retry_after)
        return JSONResponse(
            status_code=503,
            content={
                "error": "submission_failed",
                "message": exc.message,
                "request_id": rid,
            },
            headers=headers,
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

    @app.exception_handler(StackItError)
    async def handle_stackit_error(request: Request, exc: StackItError):
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

def create_app() -> FastAPI:
    app = FastAPI(
        title="StackIt API",
        description=(
            "Q&A backend: ask questions, post and accept answers, vote, "
            "and follow notifications."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Middleware ────────────────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID",
            "X-Total-Count",
            "Retry-After",
        ],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Exception Handlers ────────────────────────────────────────────────
    register_exception_handlers(app)

    # ── Routes ────────────────────────────────────────────────────────────
    app.include_router(questions.router)
    app.include_router(notifications.router)
    app.include_router(users.router)
    app.include_router(auth.router)
    app.include_router(health.router)

    return app


app = create_app()

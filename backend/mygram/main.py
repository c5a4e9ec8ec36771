"""
MyGram Backend - FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the application-wide
       collaborators (Database, TokenService, PasswordHasher, UserService),
       stores them on app.state, and wires middleware, error handlers and
       routers.
Who:   uvicorn (`uvicorn mygram.main:app`) and the test suite
       (`create_app(test_settings)`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  app.state: database, token_service, user_service   │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:  /users  /photos  /comments                │
    │           /socialmedias  /health                    │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ MyGramError → status by ErrorKind            │   │
    │  │ RequestValidationError → 400                 │   │
    │  │ Exception → 500                              │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from mygram import __version__
from mygram.config import Settings, settings as default_settings
from mygram.database import Database
from mygram.exceptions import ErrorKind, MyGramError, ValidationError
from mygram.middleware.logging import RequestLoggingMiddleware
from mygram.middleware.request_id import RequestIDMiddleware, request_id_var
from mygram.routes import comments, health, photos, social_medias, users
from mygram.security.passwords import PasswordHasher
from mygram.security.tokens import TokenService
from mygram.services.user_service import UserService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Structured Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
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

    # Third-party loggers log every query / connection at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  logging, configuration check, optional table creation.
    Shutdown: dispose the database engine.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("MyGram Backend starting up...")

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; the warning is loud enough for local development
        logger.error("Configuration error: %s", str(e))

    if app_settings.db_create_all:
        await app.state.database.create_all()
        logger.info("Database tables created (DB_CREATE_ALL=true)")

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("MyGram Backend shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

# ErrorKind → (HTTP status, log level). One table for every business error.
STATUS_BY_KIND: Dict[ErrorKind, Tuple[int, int]] = {
    ErrorKind.VALIDATION: (400, logging.WARNING),
    ErrorKind.NOT_FOUND: (404, logging.INFO),
    ErrorKind.FORBIDDEN: (403, logging.WARNING),
    ErrorKind.DUPLICATE_IDENTITY: (409, logging.INFO),
    ErrorKind.INVALID_CREDENTIALS: (400, logging.WARNING),
    ErrorKind.MISSING_TOKEN: (400, logging.INFO),
    ErrorKind.INVALID_TOKEN: (401, logging.WARNING),
    ErrorKind.TOKEN_EXPIRED: (401, logging.INFO),
    ErrorKind.PERSISTENCE: (500, logging.ERROR),
}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        MyGramError             → status from STATUS_BY_KIND
        RequestValidationError  → 400 (body / path parameter validation)
        Exception (fallback)    → 500

    Security: handlers never expose stack traces or SQL. Persistence
    failures get a generic message; details are logged server-side.
    """

    @app.exception_handler(MyGramError)
    async def handle_app_error(request: Request, exc: MyGramError):
        rid = request_id_var.get("")
        status_code, log_level = STATUS_BY_KIND.get(exc.kind, (500, logging.ERROR))

        if exc.kind is ErrorKind.PERSISTENCE:
            logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
            return JSONResponse(
                status_code=status_code,
                content={
                    "error": exc.kind.value,
                    "message": "An internal error occurred. Please try again later.",
                    "details": None,
                    "request_id": rid,
                },
            )

        logger.log(log_level, "[%s] %s: %s", rid, exc.kind.value, exc.message)
        return JSONResponse(
            status_code=status_code,
            content={
                "error": exc.kind.value,
                "message": exc.message,
                "details": exc.context or None,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
            for err in errors
        )
        error = ValidationError(
            message=message or "Validation failed",
            context={"errors": jsonable_encoder(errors, exclude={"ctx", "input", "url"})},
        )
        return await handle_app_error(request, error)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "details": None,
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the environment-loaded
                      singleton. Tests pass their own (in-memory SQLite).
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="MyGram API",
        description=(
            "Photo sharing backend: users, photos, comments and social media links. "
            "Mutations are restricted to the owner identified by the bearer token."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Application-wide collaborators ────────────────────────────────────
    tokens = TokenService(
        secret=app_settings.jwt_secret,
        algorithm=app_settings.jwt_algorithm,
        expiry_hours=app_settings.jwt_expiry_hours,
    )
    hasher = PasswordHasher(iterations=app_settings.password_hash_iterations)

    app.state.settings = app_settings
    app.state.database = Database(app_settings)
    app.state.token_service = tokens
    app.state.user_service = UserService(hasher=hasher, tokens=tokens)

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
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
    app.include_router(users.router)
    app.include_router(photos.router)
    app.include_router(comments.router)
    app.include_router(social_medias.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `mygram.main:app` to be importable
app = create_app()

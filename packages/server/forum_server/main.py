"""
Forum API Server

Entry point for the FastAPI application.
"""

from __future__ import annotations

import argparse
import asyncio

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import exc as sa_exc

from forum_server.api.v1 import router as api_v1_router
from forum_server.core.config import Settings, get_settings
from forum_server.core.database import Database
from forum_server.core.errors import BadRequestError, ForumError, ServiceUnavailableError
from forum_server.core.logging import configure_logging
from forum_server.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware

log = structlog.get_logger()


def _install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ForumError)
    async def forum_error_handler(request: Request, exc: ForumError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # Malformed bodies and path parameters are plain 400s
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid request')}" if location else "Invalid request"
        error = BadRequestError(message)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(sa_exc.TimeoutError)
    async def pool_timeout_handler(request: Request, exc: sa_exc.TimeoutError):
        log.warning("db.pool_exhausted", path=request.url.path)
        error = ServiceUnavailableError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Joe's Forum",
        description="Articles, forums, question buckets and chat.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.db = Database(settings)

    # Middleware (order matters, outermost last)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    _install_exception_handlers(app)

    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness checks."""
        return {"status": "ok"}

    @app.get("/ready", tags=["System"])
    async def readiness_check():
        """Readiness check: the database answers ``SELECT 1``."""
        if not await app.state.db.ping():
            error = ServiceUnavailableError("Database unavailable")
            return JSONResponse(status_code=error.status_code, content=error.to_dict())
        return {"status": "ready"}

    @app.on_event("startup")
    async def on_startup():
        log.info("Forum API starting", database=app.state.db.url.render_as_string(hide_password=True))

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("Forum API shutting down")
        await app.state.db.dispose()

    return app


async def _create_tables(db: Database) -> None:
    await db.create_all()
    # Release connections opened on this loop before uvicorn starts its own
    await db.dispose()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    parser = argparse.ArgumentParser(description="Joe's Forum API server")
    parser.add_argument("--host", default=None, help="Bind address (default: FORUM_HOST)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: FORUM_PORT)")
    parser.add_argument("--create-tables", action="store_true",
                        help="Create tables from the models before serving (development only)")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    application = create_app(settings)

    if args.create_tables:
        asyncio.run(_create_tables(application.state.db))

    uvicorn.run(
        application,
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level,
    )


app = create_app()

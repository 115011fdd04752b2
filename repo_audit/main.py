"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, repo_audit.api, repo_audit.observability, repo_audit.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from repo_audit.api import api_router
from repo_audit.api.deps import get_service_cache
from repo_audit.api.routers.analyze import CHUNK_HEADERS
from repo_audit.configs import get_settings
from repo_audit.models.common import ErrorResponse
from repo_audit.observability.logger import configure_logging
from repo_audit.observability.middleware import (
    CORRELATION_HEADER,
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and closes the shared HTTP client on shutdown.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    cache = get_service_cache()
    logger.info(
        "Chat-completion backend configured",
        extra={"url": cache.chat_client.url, "model": cache.chat_client.model},
    )

    yield

    # Shutdown
    await cache.aclose()
    logger.info("Application shutdown")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 with the common error schema."""
    logger.warning(
        f"{request.method} {request.url.path} - Invalid request body",
        extra={"errors": exc.errors()},
    )
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error="Invalid request body",
            details={"errors": jsonable_errors(exc)},
        ).model_dump(),
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Reduce pydantic error entries to their JSON-safe fields."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    app = FastAPI(
        title="Repository Audit API",
        description="Chunked security analysis and indexing of source repositories",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute).
    # Correlation wraps request logging so every request log carries the ID.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Chunk headers must be readable by browser callers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[*CHUNK_HEADERS, CORRELATION_HEADER],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "repo_audit.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=True,
    )

"""
FastAPI application with assembled routers.

Initializes FastAPI app with the ingest, chat and health routers, maps
domain exceptions to JSON error bodies and configures uvicorn server.

Dependencies: fastapi, ragqa.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ragqa.configs import get_settings
from ragqa.core.exceptions import RagQAException, ValidationError
from ragqa.models.responses import ErrorResponse
from ragqa.observability.correlation import get_request_id
from ragqa.observability.log_utils import log_exception_with_context
from ragqa.observability.logger import configure_logging
from ragqa.observability.middleware import (
    REQUEST_ID_HEADER,
    RequestIdMiddleware,
    RequestLoggingMiddleware,
)
from ragqa.services import get_service_cache

from .routers import chat_router, health_router, ingest_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and resolves configuration on startup, drops cached
    services on shutdown.
    """
    configure_logging(get_settings().log_level)
    # Fail fast on invalid configuration
    _ = get_service_cache().runtime_config
    logger.info("%s:lifespan - API starting", __name__)

    yield

    get_service_cache().clear()
    logger.info("%s:lifespan - Service cache cleared", __name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or get_request_id()


def _error(status_code: int, request: Request, error: str, message: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, request_id=_request_id(request))
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, request, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, request, "invalid_request", str(exc.errors()))


async def domain_error_handler(request: Request, exc: RagQAException) -> JSONResponse:
    logger.error(
        "%s:domain_error_handler - %s",
        __name__,
        exc,
        extra={"error_type": type(exc).__name__},
    )
    return _error(500, request, exc.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 carrying the request ID for non-domain failures."""
    log_exception_with_context(
        logger,
        f"{__name__}:unhandled_error_handler - Unhandled error",
        exc,
        path=request.url.path,
    )
    response = _error(500, request, str(exc))
    # Runs outside RequestIdMiddleware, so the header is set here
    response.headers[REQUEST_ID_HEADER] = _request_id(request)
    return response


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="RAG QA API",
        description="Retrieval-augmented question answering over S3 documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_allow_origins,
        allow_methods=["OPTIONS", "POST", "GET"],
        allow_headers=["content-type", "authorization", "x-api-key"],
    )

    # Add observability middleware (last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RagQAException, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health_router)
    app.include_router(ingest_router)
    app.include_router(chat_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "ragqa.api.main:app",
        host="0.0.0.0",
        port=8000,
    )

"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: ragqa.boundary.db
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from ragqa.api.deps import get_gateway
from ragqa.boundary.db.vector_store import VectorStoreGateway

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(gateway: VectorStoreGateway = Depends(get_gateway)):
    """Database health check."""
    try:
        await run_in_threadpool(gateway.ping)
    except SQLAlchemyError as e:
        logger.warning("%s:health_check_db - Database unreachable: %s", __name__, e)
        return JSONResponse(
            status_code=503,
            content=HealthResponse(status="unhealthy", message="Database unreachable").model_dump(),
        )
    return HealthResponse(status="healthy", message="Database connection OK")

"""
Ingestion API endpoints.

Routes: POST /ingest

Dependencies: ragqa.core.ingestion
System role: Ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from ragqa.api.deps import get_ingestion_orchestrator
from ragqa.core.ingestion.orchestrator import IngestionOrchestrator
from ragqa.models.ingest import IngestRequest
from ragqa.models.responses import ErrorResponse, IngestResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ingest"])


@router.post(
    "/ingest",
    response_model=IngestResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ingest(
    request: Request,
    body: IngestRequest,
    orchestrator: IngestionOrchestrator = Depends(get_ingestion_orchestrator),
) -> IngestResponse:
    """Ingest every supported object under a bucket prefix.

    The batch runs in one transaction: per-object extraction and embedding
    failures are returned in `errors`; anything else rolls the batch back
    and surfaces as a 500.

    Args:
        request: Incoming request (carries the request ID)
        body: IngestRequest with bucket, prefix, docType, tags, maxFiles
        orchestrator: Injected IngestionOrchestrator

    Returns:
        IngestResponse: Counts, timings and per-object errors
    """
    report = await run_in_threadpool(orchestrator.ingest, body)
    return IngestResponse.from_report(report, request.state.request_id)

"""Chat API endpoints.

Routes:
- POST /chat - Answer a question from the ingested documents

Dependencies: ragqa.core.chat
System role: Chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ragqa.api.deps import get_chat_orchestrator
from ragqa.core.chat.orchestrator import ChatOrchestrator
from ragqa.models.chat import ChatRequest
from ragqa.models.responses import ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    request: Request,
    body: ChatRequest,
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
):
    """Answer a question with citations.

    Flow:
    1. Guardrail the question (blocked -> 400 guardrail_blocked_input)
    2. Retrieve, assemble context and generate through ChatOrchestrator
    3. Return the guarded answer; citations are empty if the answer was blocked

    Args:
        request: Incoming request (carries the request ID)
        body: ChatRequest with question, topK, maxContextChars
        orchestrator: Injected ChatOrchestrator

    Returns:
        ChatResponse | JSONResponse: Answer with citations, or the 400 body
    """
    request_id = request.state.request_id
    result = await run_in_threadpool(orchestrator.answer, body)
    if result.blocked_input:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="guardrail_blocked_input",
                message=result.answer,
                request_id=request_id,
            ).model_dump(by_alias=True),
        )
    return ChatResponse.from_result(result, request_id)

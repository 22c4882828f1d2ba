"""
Lambda handler for the ingest and chat operations.

Routes S3 object notifications to ingestion of the object's parent prefix,
and API Gateway requests to POST /ingest and POST /chat.

Environment variables:
- DATABASE_URL: PostgreSQL connection string
- BEDROCK_MODEL_ID / BEDROCK_EMBED_MODEL_ID: Generation and embedding models
- GUARDRAIL_ID / GUARDRAIL_VERSION: Bedrock guardrail
- LOG_LEVEL: Logging level

Dependencies: ragqa.services, ragqa.lambda_utils
System role: Lambda entry point for ingestion and chat
"""

import logging
from typing import Any, Callable

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ragqa.core.exceptions import RagQAException, ValidationError
from ragqa.core.ingestion.orchestrator import is_folder_marker, parent_prefix
from ragqa.lambda_utils.config import configure_secrets
from ragqa.lambda_utils.event_parser import (
    is_s3_event,
    method_of,
    origin_of,
    parse_body,
    parse_s3_notification,
    path_of,
    request_id_of,
)
from ragqa.lambda_utils.responses import cors_headers, empty_response, json_response
from ragqa.models.chat import ChatRequest
from ragqa.models.ingest import IngestRequest
from ragqa.models.responses import (
    ChatResponse,
    ErrorResponse,
    IngestResponse,
    SkippedResponse,
)
from ragqa.observability.correlation import clear_request_id, set_request_id
from ragqa.observability.log_utils import log_exception_with_context
from ragqa.observability.logger import configure_logging
from ragqa.services import ServiceCache, get_service_cache

logger = logging.getLogger(__name__)

_bootstrapped = False


def _services() -> ServiceCache:
    """Resolve secrets, logging and configuration once per container."""
    global _bootstrapped
    cache = get_service_cache()
    if not _bootstrapped:
        configure_secrets()
        configure_logging(cache.settings.log_level)
        _ = cache.runtime_config
        _bootstrapped = True
    return cache


def _validate_body(model: type[BaseModel], payload: dict[str, Any]):
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError(f"Invalid request body: {problems}") from e


def handle_ingest(payload: dict[str, Any], request_id: str) -> dict[str, Any]:
    """
    Run one ingestion batch.

    Args:
        payload: Request body (bucket, prefix, docType, tags, maxFiles)
        request_id: Request identifier echoed in the response

    Returns:
        dict: 200 proxy response with the ingestion summary
    """
    request = _validate_body(IngestRequest, payload)
    report = _services().ingestion.ingest(request)
    return json_response(200, IngestResponse.from_report(report, request_id))


def handle_chat(payload: dict[str, Any], request_id: str) -> dict[str, Any]:
    """
    Answer one question.

    Args:
        payload: Request body (question, topK, maxContextChars)
        request_id: Request identifier echoed in the response

    Returns:
        dict: 200 with answer and citations, or 400 when the question was blocked
    """
    request = _validate_body(ChatRequest, payload)
    result = _services().chat.answer(request)
    if result.blocked_input:
        return json_response(
            400,
            ErrorResponse(
                error="guardrail_blocked_input",
                message=result.answer,
                request_id=request_id,
            ),
        )
    return json_response(200, ChatResponse.from_result(result, request_id))


def handle_s3_event(event: dict[str, Any], request_id: str) -> dict[str, Any]:
    """
    Ingest the prefix containing the notified object.

    Folder markers are acknowledged and skipped.
    """
    notification = parse_s3_notification(event)
    if is_folder_marker(notification.key):
        return json_response(
            200,
            SkippedResponse(request_id=request_id, reason="folder_marker", key=notification.key),
        )
    return handle_ingest(
        {"bucket": notification.bucket, "prefix": parent_prefix(notification.key)},
        request_id,
    )


ROUTES: dict[str, Callable[[dict[str, Any], str], dict[str, Any]]] = {
    "/ingest": handle_ingest,
    "/chat": handle_chat,
}


def _dispatch(event: dict[str, Any], request_id: str) -> dict[str, Any]:
    if is_s3_event(event):
        return handle_s3_event(event, request_id)

    if method_of(event) == "OPTIONS":
        return empty_response(204)

    path = path_of(event)
    route = ROUTES.get(path)
    if route is None:
        return json_response(404, {"error": "Not found", "path": path, "requestId": request_id})

    body = parse_body(event)
    if body.is_malformed:
        return json_response(
            400,
            ErrorResponse(error="invalid_json", message=body.error, request_id=request_id),
        )
    return route(body.payload, request_id)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Lambda entry point.

    Args:
        event: API Gateway proxy event or S3 notification
        context: Lambda context object

    Returns:
        dict: API Gateway proxy response
    """
    request_id = set_request_id(request_id_of(event))
    try:
        response = _respond(event, request_id)
    finally:
        clear_request_id()
    response["headers"].update(cors_headers(origin_of(event)))
    return response


def _respond(event: dict[str, Any], request_id: str) -> dict[str, Any]:
    """Dispatch the event and map failures to error responses."""
    try:
        return _dispatch(event, request_id)
    except ValidationError as e:
        logger.info("%s:handler - Rejected request: %s", __name__, e)
        return json_response(400, ErrorResponse(error=e.message, request_id=request_id))
    except RagQAException as e:
        logger.error(
            "%s:handler - %s: %s",
            __name__,
            type(e).__name__,
            e,
        )
        return json_response(500, ErrorResponse(error=e.message, request_id=request_id))
    except Exception as e:
        log_exception_with_context(
            logger, f"{__name__}:handler - Unhandled error", e, path=path_of(event)
        )
        return json_response(500, ErrorResponse(error=str(e), request_id=request_id))

"""Domain models for documents, chunks, ingestion and chat."""

from ragqa.models.chat import ChatRequest, ChatResult
from ragqa.models.chunk import Chunk, chunk_id_for
from ragqa.models.citation import Citation, SearchHit
from ragqa.models.document import Document, document_id_for
from ragqa.models.ingest import (
    IngestError,
    IngestionReport,
    IngestRequest,
    ItemOutcome,
    ItemStatus,
)
from ragqa.models.responses import (
    ChatResponse,
    ErrorResponse,
    IngestResponse,
    SkippedResponse,
)

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ChatResult",
    "Chunk",
    "Citation",
    "Document",
    "ErrorResponse",
    "IngestError",
    "IngestRequest",
    "IngestResponse",
    "IngestionReport",
    "ItemOutcome",
    "ItemStatus",
    "SearchHit",
    "SkippedResponse",
    "chunk_id_for",
    "document_id_for",
]

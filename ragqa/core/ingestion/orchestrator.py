"""
Ingestion pipeline orchestrator.

Lists objects under an S3 prefix, then extracts, chunks, embeds and upserts
each one inside a single database transaction.

Extraction and embedding failures are recorded per object and processing
continues. Any other exception rolls back the whole batch.

Dependencies: ragqa.boundary (S3, Bedrock, vector store), ragqa.core
System role: Ingestion orchestration (coordinates only)
"""

import logging
import posixpath
import time

from ragqa.boundary.aws.s3_client import ObjectSummary, S3ObjectStore
from ragqa.boundary.bedrock.embeddings import BedrockEmbeddingClient
from ragqa.boundary.db.vector_store import VectorStore, VectorStoreGateway
from ragqa.configs.runtime import RuntimeConfig
from ragqa.core.bounds import MAX_INGEST_FILES_RANGE, clamp
from ragqa.core.chunker import chunk_text
from ragqa.core.exceptions import (
    EmbeddingError,
    ExtractionError,
    IngestionTransactionError,
    ValidationError,
)
from ragqa.core.extraction import SUPPORTED_EXTENSIONS, TextExtractor, extension_of
from ragqa.models.chunk import Chunk, chunk_id_for
from ragqa.models.document import Document
from ragqa.models.ingest import (
    IngestError,
    IngestionReport,
    IngestRequest,
    ItemOutcome,
    ItemStatus,
)
from ragqa.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

SKIPPED_LOG_SAMPLE = 50


def is_folder_marker(key: str) -> bool:
    """Return True for zero-content "directory" keys ending in '/'."""
    return key.endswith("/")


def parent_prefix(key: str) -> str:
    """
    Return the parent path of a key with a trailing slash.

    Args:
        key: Object key, e.g. "docs/2024/cv.pdf"

    Returns:
        str: "docs/2024/" ("" for top-level keys)
    """
    parent = posixpath.dirname(key)
    return f"{parent}/" if parent else ""


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


class IngestionOrchestrator:
    """Orchestrate S3 ingestion: list -> extract -> chunk -> embed -> upsert."""

    def __init__(
        self,
        config: RuntimeConfig,
        object_store: S3ObjectStore,
        extractor: TextExtractor,
        embedder: BedrockEmbeddingClient,
        gateway: VectorStoreGateway,
    ) -> None:
        """
        Initialize orchestrator with its collaborators.

        Args:
            config: Resolved runtime configuration
            object_store: S3 lister/reader
            extractor: Byte-to-text extractor
            embedder: Embedding client
            gateway: Vector store gateway owning the transaction
        """
        self._config = config
        self._objects = object_store
        self._extractor = extractor
        self._embedder = embedder
        self._gateway = gateway

    def _partition(
        self, listed: list[ObjectSummary], max_files: int
    ) -> tuple[list[ObjectSummary], list[ItemOutcome]]:
        eligible: list[ObjectSummary] = []
        skipped: list[ItemOutcome] = []
        for obj in listed:
            if (
                is_folder_marker(obj.key)
                or obj.size == 0
                or extension_of(obj.key) not in SUPPORTED_EXTENSIONS
            ):
                skipped.append(ItemOutcome(key=obj.key, status=ItemStatus.SKIPPED, size=obj.size))
            else:
                eligible.append(obj)
        return eligible[:max_files], skipped

    def ingest(self, request: IngestRequest) -> IngestionReport:
        """
        Ingest one batch of objects.

        Args:
            request: Bucket, prefix, doc type, tags and file limit

        Returns:
            IngestionReport: Per-object outcomes with timing

        Raises:
            ValidationError: Bucket missing
            IngestionTransactionError: Unexpected failure; nothing was committed
        """
        bucket = request.bucket.strip()
        if not bucket:
            raise ValidationError("Missing bucket", field="bucket")
        prefix = request.prefix
        max_files = clamp(
            request.max_files or self._config.max_ingest_files, *MAX_INGEST_FILES_RANGE
        )

        list_started = time.perf_counter()
        listed = self._objects.list_objects(bucket, prefix)
        list_ms = _elapsed_ms(list_started)
        selected, skipped = self._partition(listed, max_files)

        logger.info(
            "%s:ingest - ingest_list",
            __name__,
            extra={
                "bucket": bucket,
                "prefix": prefix,
                "files_found": len(selected),
                "list_ms": list_ms,
            },
        )
        logger.info(
            "%s:ingest - ingest_skip_markers",
            __name__,
            extra={
                "skipped_count": len(skipped),
                "sample": [
                    {"key": o.key, "size": o.size} for o in skipped[:SKIPPED_LOG_SAMPLE]
                ],
            },
        )

        if not selected:
            return IngestionReport(
                bucket=bucket, prefix=prefix, files_found=0, list_ms=list_ms, outcomes=skipped
            )

        db_started = time.perf_counter()
        outcomes: list[ItemOutcome] = []
        try:
            with self._gateway.transaction() as store:
                for obj in selected:
                    outcomes.append(self._ingest_object(store, request, bucket, obj))
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:ingest - Batch rolled back",
                e,
                bucket=bucket,
                prefix=prefix,
                processed=len(outcomes),
            )
            raise IngestionTransactionError(
                f"Ingestion batch rolled back: {e}",
                {"bucket": bucket, "prefix": prefix, "error_type": type(e).__name__},
            ) from e

        return IngestionReport(
            bucket=bucket,
            prefix=prefix,
            files_found=len(selected),
            list_ms=list_ms,
            db_ms=_elapsed_ms(db_started),
            outcomes=skipped + outcomes,
        )

    def _ingest_object(
        self,
        store: VectorStore,
        request: IngestRequest,
        bucket: str,
        obj: ObjectSummary,
    ) -> ItemOutcome:
        key = obj.key
        extension = extension_of(key)

        try:
            data = self._objects.get_object(bucket, key)
            extracted = self._extractor.extract(data, extension)
        except ExtractionError as e:
            return ItemOutcome(
                key=key,
                status=ItemStatus.FAILED,
                size=obj.size,
                errors=[IngestError(key=key, step="extract", error=e.message)],
            )

        text = extracted.text.strip()
        logger.info(
            "%s:_ingest_object - ingest_extract",
            __name__,
            extra={
                "key": key,
                "bytes": extracted.byte_length,
                "ext": extension,
                "text_chars": len(text),
            },
        )
        if not text:
            return ItemOutcome(
                key=key,
                status=ItemStatus.FAILED,
                size=obj.size,
                errors=[IngestError(key=key, step="extract", error="empty_text")],
            )

        document = Document.from_s3_object(
            bucket, key, doc_type=request.doc_type, tags=request.tags
        )
        store.upsert_document(document)

        windows = list(
            chunk_text(text, self._config.chunk_size, self._config.chunk_overlap)
        )
        logger.info(
            "%s:_ingest_object - ingest_chunk",
            __name__,
            extra={"key": key, "chunks": len(windows)},
        )

        metadata = {
            "bucket": bucket,
            "key": key,
            "ext": extension,
            "bytes": extracted.byte_length,
            "embed_model": self._embedder.model_id,
            "embed_dims": self._embedder.dimensions,
        }
        errors: list[IngestError] = []
        written = 0
        for index, content in enumerate(windows):
            try:
                vector = self._embedder.embed(content)
            except EmbeddingError as e:
                errors.append(
                    IngestError(key=key, step="embed", error=e.message, chunk_index=index)
                )
                break
            store.upsert_chunk(
                Chunk(
                    doc_id=document.doc_id,
                    chunk_id=chunk_id_for(document.doc_id, index),
                    title=document.title,
                    section=None,
                    content=content,
                    metadata=metadata,
                    embedding=vector,
                )
            )
            written += 1

        return ItemOutcome(
            key=key,
            status=ItemStatus.PARTIAL if errors else ItemStatus.INGESTED,
            size=obj.size,
            chunks_written=written,
            errors=errors,
        )

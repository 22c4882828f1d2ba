"""
Tests for the ingestion orchestrator.

Runs the full list -> extract -> chunk -> embed -> upsert pipeline against
an in-memory object store and transactional vector store.
"""

import pytest

from ragqa.core.exceptions import (
    DimensionMismatchError,
    EmbeddingError,
    IngestionTransactionError,
    ValidationError,
)
from ragqa.core.extraction import TextExtractor
from ragqa.core.ingestion.orchestrator import (
    IngestionOrchestrator,
    is_folder_marker,
    parent_prefix,
)
from ragqa.models.document import document_id_for
from ragqa.models.ingest import IngestRequest, ItemStatus


@pytest.fixture
def orchestrator(runtime_config, fake_object_store, mock_embedder, fake_gateway):
    """Provide orchestrator wired to in-memory collaborators."""
    return IngestionOrchestrator(
        config=runtime_config,
        object_store=fake_object_store,
        extractor=TextExtractor(),
        embedder=mock_embedder,
        gateway=fake_gateway,
    )


def _text(length: int) -> bytes:
    return "".join(chr(97 + i % 26) for i in range(length)).encode("utf-8")


# ============================================================================
# Key helpers
# ============================================================================


class TestKeyHelpers:
    """Test folder marker and parent prefix helpers."""

    def test_is_folder_marker(self) -> None:
        """Should treat keys ending in '/' as folder markers."""
        assert is_folder_marker("docs/")
        assert not is_folder_marker("docs/a.pdf")

    @pytest.mark.parametrize(
        "key,expected",
        [("docs/2024/cv.pdf", "docs/2024/"), ("cv.pdf", ""), ("a/b.txt", "a/")],
    )
    def test_parent_prefix(self, key: str, expected: str) -> None:
        """Should return the parent path with a trailing slash."""
        assert parent_prefix(key) == expected


# ============================================================================
# Batch selection
# ============================================================================


class TestSelection:
    """Test listing, filtering and limits."""

    def test_missing_bucket(self, orchestrator) -> None:
        """Should reject a request without a bucket."""
        with pytest.raises(ValidationError, match="Missing bucket"):
            orchestrator.ingest(IngestRequest(bucket="  "))

    def test_skips_markers_empty_and_unsupported(
        self, orchestrator, fake_object_store, fake_gateway
    ) -> None:
        """Should only fetch supported, non-empty, non-marker objects."""
        fake_object_store.objects = {
            "docs/": b"",
            "docs/empty.txt": b"",
            "docs/image.png": b"\x89PNG",
            "docs/a.txt": b"hello world",
        }

        report = orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        assert fake_object_store.fetched == ["docs/a.txt"]
        assert report.files_found == 1
        assert report.ingested == 1
        assert {o.key for o in report.skipped} == {"docs/", "docs/empty.txt", "docs/image.png"}
        assert fake_gateway.commits == 1

    def test_nothing_eligible_skips_database(
        self, orchestrator, fake_object_store, fake_gateway
    ) -> None:
        """Should return early without opening a transaction."""
        fake_object_store.objects = {"docs/": b"", "docs/photo.jpg": b"jpg"}

        report = orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        assert report.files_found == 0
        assert report.ingested == 0
        assert report.errors == []
        assert report.db_ms is None
        assert fake_gateway.transactions == 0

    def test_max_files_limits_batch(self, orchestrator, fake_object_store) -> None:
        """Should take only the first maxFiles eligible objects."""
        fake_object_store.objects = {f"docs/{i}.txt": b"text" for i in range(5)}

        report = orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/", maxFiles=2))

        assert report.files_found == 2
        assert fake_object_store.fetched == ["docs/0.txt", "docs/1.txt"]

    def test_zero_max_files_uses_default(self, orchestrator, fake_object_store) -> None:
        """Should fall back to the configured default for maxFiles=0."""
        fake_object_store.objects = {f"docs/{i}.txt": b"text" for i in range(3)}

        report = orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/", maxFiles=0))

        assert report.files_found == 3


# ============================================================================
# Per-object processing
# ============================================================================


class TestIngestObjects:
    """Test extraction, chunking, embedding and upserts."""

    def test_writes_document_and_chunks(
        self, orchestrator, fake_object_store, fake_gateway, mock_embedder
    ) -> None:
        """Should write one document and three chunks for 3000 characters."""
        fake_object_store.objects = {"docs/a.txt": _text(3000)}

        report = orchestrator.ingest(
            IngestRequest(bucket="bucket", prefix="docs/", docType="policy", tags=["hr", "hr"])
        )

        doc_id = document_id_for("s3://bucket/docs/a.txt")
        document = fake_gateway.documents[doc_id]
        assert document.title == "a.txt"
        assert document.doc_type == "policy"
        assert document.tags == ["hr"]
        assert sorted(c for _, c in fake_gateway.chunks) == [f"{doc_id}:{i}" for i in range(3)]
        first = fake_gateway.chunks[(doc_id, f"{doc_id}:0")]
        assert first.metadata == {
            "bucket": "bucket",
            "key": "docs/a.txt",
            "ext": "txt",
            "bytes": 3000,
            "embed_model": "test-embed",
            "embed_dims": 4,
        }
        assert first.section is None
        assert mock_embedder.embed.call_count == 3
        assert report.ingested == 1
        assert report.outcomes[-1].chunks_written == 3

    def test_empty_text_is_recorded_and_batch_continues(
        self, orchestrator, fake_object_store, fake_gateway
    ) -> None:
        """Should record empty_text for a blank file and ingest the next one."""
        fake_object_store.objects = {
            "docs/blank.txt": b"   \n\t  ",
            "docs/notes.md": b"# Notes\nSomething useful",
        }

        report = orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        assert report.files_found == 2
        assert report.ingested == 1
        assert [e.model_dump() for e in report.errors] == [
            {"key": "docs/blank.txt", "step": "extract", "error": "empty_text", "chunk_index": None}
        ]
        assert len(fake_gateway.documents) == 1

    def test_fetch_failure_is_recorded(self, orchestrator, fake_object_store) -> None:
        """Should record a download failure as an extract error."""
        fake_object_store.objects = {"docs/a.txt": b"alpha", "docs/b.txt": b"beta"}
        fake_object_store.failing = {"docs/a.txt"}

        report = orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        assert report.ingested == 1
        assert report.errors[0].key == "docs/a.txt"
        assert report.errors[0].step == "extract"
        assert report.outcomes[0].status is ItemStatus.FAILED

    def test_corrupt_pdf_is_recorded(self, orchestrator, fake_object_store) -> None:
        """Should record a parser failure and keep going."""
        fake_object_store.objects = {"docs/bad.pdf": b"not a pdf", "docs/ok.txt": b"fine"}

        report = orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        assert report.ingested == 1
        assert report.errors[0].key == "docs/bad.pdf"
        assert report.errors[0].step == "extract"

    def test_embedding_failure_stops_document(
        self, orchestrator, fake_object_store, fake_gateway, mock_embedder
    ) -> None:
        """Should keep chunks written before an embedding failure and skip the rest."""
        fake_object_store.objects = {"docs/a.txt": _text(3000)}
        mock_embedder.embed.side_effect = [
            [0.1, 0.2, 0.3, 0.4],
            EmbeddingError("Embedding request failed: throttled"),
            [0.1, 0.2, 0.3, 0.4],
        ]

        report = orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        outcome = report.outcomes[-1]
        assert outcome.status is ItemStatus.PARTIAL
        assert outcome.chunks_written == 1
        assert report.errors[0].step == "embed"
        assert report.errors[0].chunk_index == 1
        assert mock_embedder.embed.call_count == 2
        assert len(fake_gateway.chunks) == 1
        assert report.ingested == 1

    def test_wrong_dimensionality_writes_no_chunk(
        self, orchestrator, fake_object_store, fake_gateway, mock_embedder
    ) -> None:
        """Should record a dimension mismatch and write no chunk row for it."""
        fake_object_store.objects = {"docs/a.txt": _text(3000)}
        mock_embedder.embed.side_effect = DimensionMismatchError(expected=4, actual=3)

        report = orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        assert [e.model_dump() for e in report.errors] == [
            {
                "key": "docs/a.txt",
                "step": "embed",
                "error": "Embedding dim mismatch. Got 3, expected 4.",
                "chunk_index": 0,
            }
        ]
        assert mock_embedder.embed.call_count == 1
        assert fake_gateway.chunks == {}
        assert len(fake_gateway.documents) == 1
        assert report.outcomes[-1].chunks_written == 0
        assert fake_gateway.commits == 1

    def test_reingest_is_idempotent(self, orchestrator, fake_object_store, fake_gateway) -> None:
        """Should address the same rows when the same objects are ingested again."""
        fake_object_store.objects = {"docs/a.txt": _text(2500), "docs/b.txt": b"short"}

        orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))
        first_docs = set(fake_gateway.documents)
        first_chunks = set(fake_gateway.chunks)
        orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        assert set(fake_gateway.documents) == first_docs
        assert set(fake_gateway.chunks) == first_chunks
        assert fake_gateway.commits == 2


# ============================================================================
# Transaction boundary
# ============================================================================


class TestTransactionBoundary:
    """Test all-or-nothing behaviour on unexpected failures."""

    def test_unexpected_error_rolls_back_batch(
        self, orchestrator, fake_object_store, fake_gateway, mock_embedder
    ) -> None:
        """Should discard writes for objects 1 and 2 when object 3 fails unexpectedly."""
        fake_object_store.objects = {
            "docs/1.txt": b"one",
            "docs/2.txt": b"two",
            "docs/3.txt": b"three",
        }
        mock_embedder.embed.side_effect = [
            [0.1, 0.2, 0.3, 0.4],
            [0.1, 0.2, 0.3, 0.4],
            RuntimeError("connection reset"),
        ]

        with pytest.raises(IngestionTransactionError) as exc_info:
            orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert fake_gateway.rollbacks == 1
        assert fake_gateway.commits == 0
        assert fake_gateway.documents == {}
        assert fake_gateway.chunks == {}

    def test_store_dimension_mismatch_rolls_back(
        self, orchestrator, fake_object_store, fake_gateway, mock_embedder
    ) -> None:
        """Should treat a store-side dimension check failure as fatal."""
        fake_object_store.objects = {"docs/a.txt": b"alpha"}
        fake_gateway.dimensions = 8

        with pytest.raises(IngestionTransactionError):
            orchestrator.ingest(IngestRequest(bucket="bucket", prefix="docs/"))

        assert fake_gateway.documents == {}

"""
Tests for domain models and request/response schemas.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from ragqa.core.chat.prompt import REFUSAL_TEXT, render_prompt
from ragqa.models.chat import ChatRequest
from ragqa.models.chunk import Chunk, chunk_id_for
from ragqa.models.document import Document, document_id_for
from ragqa.models.ingest import (
    IngestError,
    IngestionReport,
    IngestRequest,
    ItemOutcome,
    ItemStatus,
)
from ragqa.models.responses import ErrorResponse, IngestResponse


class TestDocument:
    """Test Document construction."""

    def test_id_is_derived_from_source_uri(self) -> None:
        """Should derive a stable id from s3://bucket/key."""
        doc = Document.from_s3_object("bucket", "docs/2024/report.pdf")

        assert doc.source_uri == "s3://bucket/docs/2024/report.pdf"
        assert doc.doc_id == document_id_for("s3://bucket/docs/2024/report.pdf")
        assert len(doc.doc_id) == 64
        assert doc.title == "report.pdf"
        assert doc.source == "s3"

    def test_different_keys_differ(self) -> None:
        """Should give different objects different ids."""
        assert document_id_for("s3://b/a.txt") != document_id_for("s3://b/b.txt")

    def test_tags_are_unique(self) -> None:
        """Should drop duplicate tags keeping first-seen order."""
        doc = Document.from_s3_object("b", "k.txt", tags=["x", "y", "x"])

        assert doc.tags == ["x", "y"]


class TestChunk:
    """Test Chunk validation."""

    def test_chunk_id(self) -> None:
        """Should join document id and index."""
        assert chunk_id_for("abc", 3) == "abc:3"

    def test_blank_content_rejected(self) -> None:
        """Should refuse whitespace-only content."""
        with pytest.raises(PydanticValidationError):
            Chunk(doc_id="d", chunk_id="d:0", content="   ", embedding=[0.1])


class TestRequests:
    """Test request parsing."""

    def test_ingest_request_aliases_and_defaults(self) -> None:
        """Should accept camelCase aliases and default blank values."""
        request = IngestRequest.model_validate(
            {"bucket": "b", "prefix": None, "docType": "", "tags": None, "maxFiles": 5}
        )

        assert request.prefix == ""
        assert request.doc_type == "doc"
        assert request.tags == []
        assert request.max_files == 5

    def test_chat_request_aliases(self) -> None:
        """Should accept topK and maxContextChars."""
        request = ChatRequest.model_validate(
            {"question": "q", "topK": 4, "maxContextChars": 2000}
        )

        assert request.top_k == 4
        assert request.max_context_chars == 2000


class TestReport:
    """Test IngestionReport aggregation and the wire response."""

    def test_counts_partial_as_ingested(self) -> None:
        """Should count ingested and partial documents."""
        report = IngestionReport(
            bucket="b",
            prefix="",
            files_found=3,
            outcomes=[
                ItemOutcome(key="s", status=ItemStatus.SKIPPED),
                ItemOutcome(key="a", status=ItemStatus.INGESTED),
                ItemOutcome(
                    key="p",
                    status=ItemStatus.PARTIAL,
                    errors=[IngestError(key="p", step="embed", error="x", chunk_index=2)],
                ),
                ItemOutcome(
                    key="f",
                    status=ItemStatus.FAILED,
                    errors=[IngestError(key="f", step="extract", error="empty_text")],
                ),
            ],
        )

        assert report.ingested == 2
        assert [e.key for e in report.errors] == ["p", "f"]
        assert [o.key for o in report.skipped] == ["s"]

    def test_ingest_response_wire_format(self) -> None:
        """Should serialise with camelCase keys and chunkIndex."""
        report = IngestionReport(
            bucket="b",
            prefix="docs/",
            files_found=1,
            list_ms=3,
            db_ms=9,
            outcomes=[
                ItemOutcome(
                    key="k",
                    status=ItemStatus.PARTIAL,
                    errors=[IngestError(key="k", step="embed", error="x", chunk_index=1)],
                )
            ],
        )

        body = IngestResponse.from_report(report, "rid").model_dump(by_alias=True)

        assert body["requestId"] == "rid"
        assert body["filesFound"] == 1
        assert body["errors"][0]["chunkIndex"] == 1

    def test_error_response(self) -> None:
        """Should drop an absent message."""
        body = ErrorResponse(error="e", request_id="r").model_dump(by_alias=True, exclude_none=True)

        assert body == {"error": "e", "requestId": "r"}


class TestPrompt:
    """Test grounded prompt rendering."""

    def test_render_prompt(self) -> None:
        """Should embed refusal text, context and question."""
        prompt = render_prompt("What is X?", "X is Y.")

        assert f'reply exactly: "{REFUSAL_TEXT}"' in prompt
        assert "Context:\nX is Y." in prompt
        assert prompt.rstrip().endswith("Answer (cite document titles when relevant):")

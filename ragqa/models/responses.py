"""
Response schemas shared by the HTTP API and the Lambda handler.

Field names are camelCase on the wire; every body carries the request ID.

Dependencies: pydantic
System role: Request surface contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from ragqa.models.chat import ChatResult
from ragqa.models.citation import Citation
from ragqa.models.ingest import IngestError, IngestionReport


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngestResponse(_CamelModel):
    """Ingestion batch summary."""

    request_id: str
    bucket: str
    prefix: str
    files_found: int
    ingested: int
    list_ms: int
    db_ms: int | None = None
    errors: list[IngestError] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: IngestionReport, request_id: str) -> "IngestResponse":
        return cls(
            request_id=request_id,
            bucket=report.bucket,
            prefix=report.prefix,
            files_found=report.files_found,
            ingested=report.ingested,
            list_ms=report.list_ms,
            db_ms=report.db_ms,
            errors=report.errors,
        )


class ChatResponse(_CamelModel):
    """Grounded answer with citations."""

    request_id: str
    answer: str
    citations: list[Citation] = Field(default_factory=list)

    @field_serializer("citations")
    def serialize_citations(self, citations: list[Citation]) -> list[dict[str, Any]]:
        # Plain dicts keep a null title even when the body is dumped with exclude_none
        return [citation.model_dump(mode="json") for citation in citations]

    @classmethod
    def from_result(cls, result: ChatResult, request_id: str) -> "ChatResponse":
        return cls(request_id=request_id, answer=result.answer, citations=result.citations)


class SkippedResponse(_CamelModel):
    """Storage notification that was ignored."""

    request_id: str
    skipped: bool = True
    reason: str
    key: str


class ErrorResponse(_CamelModel):
    """Error body."""

    error: str
    message: str | None = None
    request_id: str

"""
Ingestion domain models and schemas.

Request schema for an ingestion batch and the per-item outcomes aggregated
into the batch report.

Dependencies: pydantic
System role: Ingestion API contracts and result aggregation
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IngestRequest(BaseModel):
    """Request schema for ingesting objects under an S3 prefix."""

    model_config = ConfigDict(populate_by_name=True)

    bucket: str = Field(default="", description="Source bucket")
    prefix: str = Field(default="", description="Key prefix to list")
    doc_type: str = Field(default="doc", alias="docType", description="Document type label")
    tags: list[str] = Field(default_factory=list, description="Tags applied to every document")
    max_files: int | None = Field(
        default=None,
        alias="maxFiles",
        description="Maximum objects to ingest (clamped to 1..500)",
    )

    @field_validator("bucket", "prefix", mode="before")
    @classmethod
    def _blank_to_empty(cls, value):
        return value or ""

    @field_validator("doc_type", mode="before")
    @classmethod
    def _doc_type_default(cls, value):
        return value or "doc"

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value):
        return value or []


class IngestError(BaseModel):
    """Structured, non-fatal error recorded for one object."""

    key: str
    step: str = Field(description="'extract' or 'embed'")
    error: str
    chunk_index: int | None = Field(default=None, serialization_alias="chunkIndex")


class ItemStatus(str, Enum):
    """Outcome of one listed object."""

    INGESTED = "ingested"
    PARTIAL = "partial"
    SKIPPED = "skipped"
    FAILED = "failed"


class ItemOutcome(BaseModel):
    """What happened to one object in the batch."""

    key: str
    status: ItemStatus
    size: int = 0
    chunks_written: int = 0
    errors: list[IngestError] = Field(default_factory=list)


class IngestionReport(BaseModel):
    """Aggregated result of one ingestion batch."""

    bucket: str
    prefix: str
    files_found: int = 0
    list_ms: int = 0
    db_ms: int | None = None
    outcomes: list[ItemOutcome] = Field(default_factory=list)

    @property
    def ingested(self) -> int:
        """Documents written (fully or up to an embedding failure)."""
        return sum(
            1 for o in self.outcomes if o.status in (ItemStatus.INGESTED, ItemStatus.PARTIAL)
        )

    @property
    def errors(self) -> list[IngestError]:
        """All recorded errors in processing order."""
        return [error for outcome in self.outcomes for error in outcome.errors]

    @property
    def skipped(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status is ItemStatus.SKIPPED]

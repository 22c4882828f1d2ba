"""
Chunk domain model.

Represents one embeddable window of a document with its vector.

Dependencies: pydantic
System role: Document chunk data structure
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


def chunk_id_for(doc_id: str, index: int) -> str:
    """Return the chunk identifier for the index-th window of a document."""
    return f"{doc_id}:{index}"


class Chunk(BaseModel):
    """Document chunk model."""

    doc_id: str = Field(description="Parent document identifier")
    chunk_id: str = Field(description="'{doc_id}:{index}'")
    title: str | None = Field(default=None, description="Parent document title")
    section: str | None = Field(default=None, description="Section heading (unused by S3 ingestion)")
    content: str = Field(description="Trimmed, non-empty chunk text")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="bucket, key, ext, bytes, embed_model, embed_dims",
    )
    embedding: list[float] = Field(description="Embedding vector")

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, content: str) -> str:
        content = content.strip()
        if not content:
            raise ValueError("chunk content must not be empty")
        return content

"""
Citation and search hit models.

Represents retrieved chunks and the citations built from them.

Dependencies: pydantic
System role: Retrieval result structures
"""

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    """Single row returned by a similarity search."""

    doc_id: str
    chunk_id: str
    title: str | None = None
    content: str | None = None
    score: float = Field(description="1 - cosine distance")


class Citation(BaseModel):
    """Citation model for source attribution."""

    doc_id: str = Field(description="Source document identifier")
    chunk_id: str = Field(description="Chunk identifier for tracing")
    title: str | None = Field(default=None, description="Source document title")
    score: float = Field(description="Similarity score of the cited chunk")

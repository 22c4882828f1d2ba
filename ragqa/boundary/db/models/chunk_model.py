"""
Chunk ORM model.

One row per embedded window, keyed by (doc_id, chunk_id), with a pgvector
embedding column.

Dependencies: sqlalchemy, pgvector, ragqa.boundary.db.base
System role: Chunk and embedding persistence for similarity search
"""

from typing import Any

from pgvector.sqlalchemy import Vector
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ragqa.boundary.db.base import Base


class ChunkModel(Base):
    """
    Chunk ORM model.

    The embedding column is declared without a fixed dimension; the
    configured dimensionality is enforced before writes.

    Attributes:
        doc_id: Parent document (ON DELETE CASCADE)
        chunk_id: "{doc_id}:{index}"
        title: Parent document title
        section: Section heading (nullable)
        content: Chunk text
        chunk_metadata: JSONB column named "metadata"
        embedding: pgvector column
    """

    __tablename__ = "rag_chunks"

    doc_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("rag_documents.doc_id", ondelete="CASCADE"),
        primary_key=True,
    )
    chunk_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    section: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    chunk_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSONB, nullable=False, default=dict
    )
    embedding: Mapped[list[float] | None] = mapped_column(Vector(), nullable=True)

    document: Mapped["DocumentModel"] = relationship(  # noqa: F821
        "DocumentModel",
        back_populates="chunks",
    )

    def __repr__(self) -> str:
        return f"<ChunkModel(chunk_id={self.chunk_id})>"

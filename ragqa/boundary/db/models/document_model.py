"""
Document ORM model.

One row per ingested source object, keyed by the hash of its source URI.

Dependencies: sqlalchemy, ragqa.boundary.db.base
System role: Document persistence for the vector store
"""

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ragqa.boundary.db.base import Base, TimestampMixin


class DocumentModel(Base, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        doc_id: SHA-256 hex of source_uri (primary key)
        title: Object basename
        doc_type: Caller-supplied type label
        source: Source system ("s3")
        source_uri: s3://bucket/key
        tags: Text array of tags

    Relationships:
        chunks: ChunkModel rows (back_populates=document)
    """

    __tablename__ = "rag_documents"

    doc_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    doc_type: Mapped[str] = mapped_column(String(64), nullable=False, default="doc")
    source: Mapped[str] = mapped_column(String(32), nullable=False, default="s3")
    source_uri: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)

    chunks: Mapped[list["ChunkModel"]] = relationship(  # noqa: F821
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<DocumentModel(doc_id={self.doc_id}, title={self.title})>"

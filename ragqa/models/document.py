"""
Document domain model.

One logical source artifact. The identifier is derived from the source URI
so re-ingesting the same object always addresses the same row.

Dependencies: pydantic, hashlib
System role: Document data structure
"""

import hashlib
import posixpath

from pydantic import BaseModel, Field, field_validator


def document_id_for(source_uri: str) -> str:
    """
    Derive the document identifier from its canonical source URI.

    Args:
        source_uri: e.g. "s3://bucket/path/file.pdf"

    Returns:
        str: SHA-256 hex digest of the URI
    """
    return hashlib.sha256(source_uri.encode("utf-8")).hexdigest()


class Document(BaseModel):
    """Document metadata persisted in rag_documents."""

    doc_id: str = Field(description="SHA-256 of source_uri")
    title: str = Field(description="Display title (object basename)")
    doc_type: str = Field(default="doc", description="Caller-supplied document type")
    source: str = Field(default="s3", description="Source system")
    source_uri: str = Field(description="Canonical source location")
    tags: list[str] = Field(default_factory=list, description="Unique tags")

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, tags: list[str]) -> list[str]:
        return list(dict.fromkeys(tags))

    @classmethod
    def from_s3_object(
        cls,
        bucket: str,
        key: str,
        doc_type: str = "doc",
        tags: list[str] | None = None,
    ) -> "Document":
        """
        Build the document for an S3 object.

        Args:
            bucket: Bucket name
            key: Object key
            doc_type: Document type label
            tags: Optional tags

        Returns:
            Document: With doc_id derived from s3://bucket/key
        """
        source_uri = f"s3://{bucket}/{key}"
        return cls(
            doc_id=document_id_for(source_uri),
            title=posixpath.basename(key) or key,
            doc_type=doc_type,
            source="s3",
            source_uri=source_uri,
            tags=tags or [],
        )

"""ORM models for the vector store tables."""

from ragqa.boundary.db.models.chunk_model import ChunkModel
from ragqa.boundary.db.models.document_model import DocumentModel

__all__ = ["ChunkModel", "DocumentModel"]

"""
Database boundary layer: ORM models, connection management and the vector store.

Exports:
  - Base, TimestampMixin: Model building blocks
  - get_engine(), get_session_factory(): Connection management
  - DocumentModel, ChunkModel: rag_documents and rag_chunks tables
  - VectorStore, VectorStoreGateway: Upserts and similarity search

Dependencies: sqlalchemy, pgvector, ragqa.configs
System role: Persistent storage for documents, chunks and embeddings
"""

from ragqa.boundary.db.base import Base, TimestampMixin
from ragqa.boundary.db.connection import get_engine, get_session_factory
from ragqa.boundary.db.models import ChunkModel, DocumentModel
from ragqa.boundary.db.vector_store import VectorStore, VectorStoreGateway

__all__ = [
    "Base",
    "ChunkModel",
    "DocumentModel",
    "TimestampMixin",
    "VectorStore",
    "VectorStoreGateway",
    "get_engine",
    "get_session_factory",
]

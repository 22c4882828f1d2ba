"""
pgvector-backed vector store.

Upserts documents and chunks and runs cosine similarity search over the
chunk embeddings. All operations run on the caller's session; the gateway
owns session checkout and the transaction boundary.

Dependencies: sqlalchemy, pgvector
System role: Persistence and retrieval for the ingestion and chat pipelines
"""

import logging
import math
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy import func, select, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ragqa.boundary.db.models import ChunkModel, DocumentModel
from ragqa.core.exceptions import DimensionMismatchError, VectorStoreError
from ragqa.models.chunk import Chunk
from ragqa.models.citation import SearchHit
from ragqa.models.document import Document

logger = logging.getLogger(__name__)


def finite_vector(values: list[float]) -> list[float]:
    """Replace non-finite or non-numeric entries with 0.0."""
    return [
        float(v) if isinstance(v, (int, float)) and math.isfinite(v) else 0.0
        for v in values
    ]


def document_upsert_statement(doc: Document):
    """Build INSERT ... ON CONFLICT (doc_id) DO UPDATE for one document."""
    table = DocumentModel.__table__
    stmt = pg_insert(table).values(
        doc_id=doc.doc_id,
        title=doc.title,
        doc_type=doc.doc_type,
        source=doc.source,
        source_uri=doc.source_uri,
        tags=list(doc.tags),
    )
    return stmt.on_conflict_do_update(
        index_elements=[table.c.doc_id],
        set_={
            "title": stmt.excluded.title,
            "doc_type": stmt.excluded.doc_type,
            "source": stmt.excluded.source,
            "source_uri": stmt.excluded.source_uri,
            "tags": stmt.excluded.tags,
            "updated_at": func.now(),
        },
    )


def chunk_upsert_statement(chunk: Chunk, embedding: list[float]):
    """
    Build INSERT ... ON CONFLICT (doc_id, chunk_id) DO UPDATE for one chunk.

    Table-level statements address the JSONB column by its column name
    "metadata", not the mapped attribute name.
    """
    table = ChunkModel.__table__
    stmt = pg_insert(table).values(
        doc_id=chunk.doc_id,
        chunk_id=chunk.chunk_id,
        title=chunk.title,
        section=chunk.section,
        content=chunk.content,
        metadata=chunk.metadata,
        embedding=embedding,
    )
    return stmt.on_conflict_do_update(
        index_elements=[table.c.doc_id, table.c.chunk_id],
        set_={
            "title": stmt.excluded.title,
            "section": stmt.excluded.section,
            "content": stmt.excluded.content,
            "metadata": stmt.excluded["metadata"],
            "embedding": stmt.excluded.embedding,
        },
    )


def similarity_statement(query_embedding: list[float], k: int):
    """Build the top-k cosine similarity query."""
    distance = ChunkModel.embedding.cosine_distance(query_embedding)
    return (
        select(
            ChunkModel.doc_id,
            ChunkModel.chunk_id,
            ChunkModel.title,
            ChunkModel.content,
            (1 - distance).label("score"),
        )
        .where(ChunkModel.embedding.is_not(None))
        .order_by(distance, ChunkModel.doc_id, ChunkModel.chunk_id)
        .limit(k)
    )


class VectorStore:
    """Vector store operations bound to one session."""

    def __init__(self, session: Session, dimensions: int) -> None:
        """
        Initialize vector store.

        Args:
            session: Session owned by the caller
            dimensions: Required embedding length
        """
        self._session = session
        self._dimensions = dimensions

    def _check_dimensions(self, vector: list[float]) -> None:
        if len(vector) != self._dimensions:
            raise DimensionMismatchError(expected=self._dimensions, actual=len(vector))

    def _execute(self, operation: str, statement):
        try:
            return self._session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(
                "%s:%s - Statement failed",
                __name__,
                operation,
                extra={"error_type": type(e).__name__},
            )
            raise VectorStoreError(f"{operation} failed: {e}", operation=operation) from e

    def upsert_document(self, doc: Document) -> None:
        """
        Insert a document or refresh its metadata and updated_at.

        Args:
            doc: Document to write
        """
        self._execute("upsert_document", document_upsert_statement(doc))

    def upsert_chunk(self, chunk: Chunk) -> None:
        """
        Insert a chunk or overwrite the chunk at the same (doc_id, chunk_id).

        Args:
            chunk: Chunk with its embedding

        Raises:
            DimensionMismatchError: Embedding length differs from configuration
            VectorStoreError: Statement failed
        """
        self._check_dimensions(chunk.embedding)
        self._execute(
            "upsert_chunk", chunk_upsert_statement(chunk, finite_vector(chunk.embedding))
        )

    def similarity_search(self, query_embedding: list[float], k: int) -> list[SearchHit]:
        """
        Return the k chunks closest to the query by cosine distance.

        Args:
            query_embedding: Query vector
            k: Maximum rows

        Returns:
            list[SearchHit]: Ordered by descending score (ties by doc_id, chunk_id)

        Raises:
            DimensionMismatchError: Query length differs from configuration
            VectorStoreError: Query failed
        """
        self._check_dimensions(query_embedding)
        rows = self._execute(
            "similarity_search", similarity_statement(finite_vector(query_embedding), k)
        ).all()
        logger.debug(
            "%s:similarity_search - Retrieved rows",
            __name__,
            extra={"k": k, "rows": len(rows)},
        )
        return [
            SearchHit(
                doc_id=row.doc_id,
                chunk_id=row.chunk_id,
                title=row.title,
                content=row.content,
                score=float(row.score),
            )
            for row in rows
        ]


class VectorStoreGateway:
    """Checks out sessions and scopes vector store work."""

    def __init__(self, session_factory: Callable[[], Session], dimensions: int) -> None:
        """
        Initialize gateway.

        Args:
            session_factory: Session factory (sessionmaker)
            dimensions: Required embedding length
        """
        self._session_factory = session_factory
        self._dimensions = dimensions

    @contextmanager
    def transaction(self) -> Iterator[VectorStore]:
        """
        Open one session and one transaction.

        Commits when the block exits normally; rolls back and re-raises on any
        exception. The session is always closed.

        Yields:
            VectorStore: Store bound to the transactional session
        """
        with self._session_factory() as session:
            with session.begin():
                yield VectorStore(session, self._dimensions)

    @contextmanager
    def reader(self) -> Iterator[VectorStore]:
        """
        Open one session for read-only queries.

        Yields:
            VectorStore: Store bound to a short-lived session
        """
        with self._session_factory() as session:
            yield VectorStore(session, self._dimensions)

    def ping(self) -> None:
        """Run SELECT 1 on a fresh session; raises on connection failure."""
        with self._session_factory() as session:
            session.execute(text("SELECT 1"))

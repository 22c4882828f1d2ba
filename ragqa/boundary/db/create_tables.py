"""
Database table creation script.

Enables the pgvector extension and creates the document and chunk tables.

Dependencies: sqlalchemy, pgvector, ragqa.configs
System role: Database schema initialization

Usage:
    python -m ragqa.boundary.db.create_tables
"""

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ragqa.boundary.db.base import Base
from ragqa.boundary.db.connection import get_engine

# Import all models to register them with Base.metadata
from ragqa.boundary.db.models import ChunkModel, DocumentModel  # noqa: F401

logger = logging.getLogger(__name__)


def create_tables(engine: Engine | None = None) -> None:
    """
    Create the vector extension and all registered tables.

    Idempotent: CREATE EXTENSION IF NOT EXISTS and CREATE TABLE IF NOT EXISTS.

    Args:
        engine: Target engine (created from settings when omitted)

    Raises:
        SQLAlchemyError: Connection failed or the role may not create extensions
    """
    engine = engine or get_engine()
    with engine.begin() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    Base.metadata.create_all(bind=engine)
    logger.info("%s:create_tables - Tables created", __name__)


if __name__ == "__main__":
    from ragqa.observability.logger import configure_logging

    configure_logging()
    create_tables()

"""
Database connection management.

Provides the SQLAlchemy engine and session factory for the pgvector store.
TLS verification against the RDS CA bundle is enabled when the bundle file
is present.

Dependencies: sqlalchemy, psycopg2, ragqa.configs
System role: Database connection lifecycle management
"""

import logging
import os
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool

from ragqa.configs.database import DatabaseSettings
from ragqa.configs.settings import get_settings

logger = logging.getLogger(__name__)


def build_connect_args(db_config: DatabaseSettings) -> dict[str, Any]:
    """
    Build psycopg2 connect arguments.

    Args:
        db_config: Database settings

    Returns:
        dict: connect_timeout, plus sslmode/sslrootcert when the CA bundle exists
    """
    connect_args: dict[str, Any] = {"connect_timeout": db_config.connect_timeout}
    if db_config.ssl_ca_path and os.path.exists(db_config.ssl_ca_path):
        connect_args["sslmode"] = "verify-full"
        connect_args["sslrootcert"] = db_config.ssl_ca_path
    return connect_args


def get_engine(db_config: DatabaseSettings | None = None) -> Engine:
    """
    Create SQLAlchemy engine with connection pooling and health checks.

    pool_pre_ping=True verifies connections before use to detect stale
    connections left over from a frozen Lambda container.

    Args:
        db_config: Database settings (defaults to the application settings)

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    db_config = db_config or get_settings().database
    connect_args = build_connect_args(db_config)
    logger.info(
        "%s:get_engine - Creating engine",
        __name__,
        extra={"tls": "sslrootcert" in connect_args, "pool_size": db_config.pool_size},
    )
    return create_engine(
        db_config.sqlalchemy_url,
        echo=db_config.echo_sql,
        poolclass=QueuePool,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def get_session_factory(engine: Engine | None = None) -> sessionmaker:
    """
    Create session factory for database operations.

    autoflush=False and expire_on_commit=False keep statement ordering
    explicit inside ingestion transactions.

    Args:
        engine: Engine to bind (created from settings when omitted)

    Returns:
        sessionmaker: Session factory
    """
    return sessionmaker(
        bind=engine or get_engine(),
        autoflush=False,
        expire_on_commit=False,
    )

"""
Database configuration settings.

Manages PostgreSQL (pgvector) connection parameters for SQLAlchemy.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for the vector store
"""

from pydantic import Field

from ragqa.configs.base import BaseSettings, settings_config


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = settings_config("DATABASE_")

    url: str = Field(default="", description="PostgreSQL connection string (DATABASE_URL)")
    ssl_ca_path: str = Field(
        default="/var/task/rds-ca-bundle.pem",
        description="CA bundle for RDS TLS verification (ignored when the file is absent)",
    )
    connect_timeout: int = Field(default=10, description="Connection timeout in seconds")

    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=5, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def sqlalchemy_url(self) -> str:
        """
        Normalise the configured URL to the psycopg2 SQLAlchemy dialect.

        Returns:
            str: SQLAlchemy-compatible database URL
        """
        url = self.url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+psycopg2://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+psycopg2://", 1)
        return url

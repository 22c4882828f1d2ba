"""
Pipeline configuration settings.

Chunking parameters for ingestion and retrieval budgets for chat.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from pydantic import Field

from ragqa.configs.base import BaseSettings


class PipelineSettings(BaseSettings):
    """Settings for the ingestion and chat pipelines."""

    # Chunking settings
    chunk_size: int = Field(default=1200, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=200, description="Overlap between consecutive chunks")

    # Ingestion settings
    max_ingest_files: int = Field(default=50, description="Default maximum objects per ingest batch")

    # Retrieval settings
    default_top_k: int = Field(default=6, description="Default number of chunks to retrieve")
    max_context_chars: int = Field(
        default=12000,
        description="Default character budget for the assembled context",
    )

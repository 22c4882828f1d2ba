"""
Resolved runtime configuration.

Turns environment-backed settings into one immutable value at process start:
model families resolved, dimensionality validated, chunk parameters checked.
Orchestrators and adapters receive this value explicitly.

Dependencies: pydantic, ragqa.configs.settings, ragqa.core.model_family
System role: Startup-time configuration resolution
"""

import logging

from pydantic import BaseModel, ConfigDict

from ragqa.configs.settings import Settings
from ragqa.core.exceptions import ConfigurationError
from ragqa.core.model_family import (
    EmbeddingFamily,
    GenerationFamily,
    resolve_embedding_dimensions,
    resolve_embedding_family,
    resolve_generation_family,
)

logger = logging.getLogger(__name__)


class EmbeddingConfig(BaseModel):
    """Resolved embedding model configuration."""

    model_config = ConfigDict(frozen=True)

    model_id: str
    family: EmbeddingFamily
    dimensions: int
    normalize: bool = True


class GenerationConfig(BaseModel):
    """Resolved generative model configuration."""

    model_config = ConfigDict(frozen=True)

    model_id: str
    family: GenerationFamily
    max_tokens: int = 600
    temperature: float = 0.2


class GuardrailConfig(BaseModel):
    """Guardrail identity."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    version: str


class RuntimeConfig(BaseModel):
    """Immutable configuration shared by the ingestion and chat pipelines."""

    model_config = ConfigDict(frozen=True)

    embedding: EmbeddingConfig
    generation: GenerationConfig
    guardrail: GuardrailConfig
    chunk_size: int = 1200
    chunk_overlap: int = 200
    default_top_k: int = 6
    max_context_chars: int = 12000
    max_ingest_files: int = 50


def build_runtime_config(settings: Settings) -> RuntimeConfig:
    """
    Validate settings and resolve them into a RuntimeConfig.

    Args:
        settings: Loaded application settings

    Returns:
        RuntimeConfig: Frozen configuration value

    Raises:
        ConfigurationError: Missing model or guardrail ids, disallowed dimensionality or
            invalid chunk parameters
    """
    bedrock = settings.bedrock
    pipeline = settings.pipeline

    if not settings.database.url:
        raise ConfigurationError("DATABASE_URL is required")
    if not bedrock.model_id:
        raise ConfigurationError("BEDROCK_MODEL_ID is required")
    if not bedrock.embed_model_id:
        raise ConfigurationError("BEDROCK_EMBED_MODEL_ID is required")
    if not settings.guardrail.id:
        raise ConfigurationError("GUARDRAIL_ID is required")
    if pipeline.chunk_size <= 0:
        raise ConfigurationError("CHUNK_SIZE must be positive", {"chunk_size": pipeline.chunk_size})
    if pipeline.chunk_overlap < 0:
        raise ConfigurationError(
            "CHUNK_OVERLAP must not be negative", {"chunk_overlap": pipeline.chunk_overlap}
        )
    if pipeline.chunk_overlap >= pipeline.chunk_size:
        logger.warning(
            "%s:build_runtime_config - chunk_overlap >= chunk_size, windows will not overlap",
            __name__,
            extra={"chunk_size": pipeline.chunk_size, "chunk_overlap": pipeline.chunk_overlap},
        )

    embedding_family = resolve_embedding_family(bedrock.embed_model_id)
    dimensions = resolve_embedding_dimensions(embedding_family, bedrock.embed_dim)

    config = RuntimeConfig(
        embedding=EmbeddingConfig(
            model_id=bedrock.embed_model_id,
            family=embedding_family,
            dimensions=dimensions,
            normalize=bedrock.embed_normalize,
        ),
        generation=GenerationConfig(
            model_id=bedrock.model_id,
            family=resolve_generation_family(bedrock.model_id),
            max_tokens=bedrock.max_tokens,
            temperature=bedrock.temperature,
        ),
        guardrail=GuardrailConfig(
            identifier=settings.guardrail.id,
            version=settings.guardrail.version,
        ),
        chunk_size=pipeline.chunk_size,
        chunk_overlap=pipeline.chunk_overlap,
        default_top_k=pipeline.default_top_k,
        max_context_chars=pipeline.max_context_chars,
        max_ingest_files=pipeline.max_ingest_files,
    )

    logger.info(
        "%s:build_runtime_config - Configuration resolved",
        __name__,
        extra={
            "embed_model": config.embedding.model_id,
            "embed_family": config.embedding.family.value,
            "embed_dims": config.embedding.dimensions,
            "generation_family": config.generation.family.value,
        },
    )
    return config

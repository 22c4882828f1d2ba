"""
Model family resolution.

Maps Bedrock model identifiers to an explicit family tag once, at startup.
Adapters shape requests from the tag and never inspect the raw id again.

Dependencies: ragqa.core.exceptions
System role: Model family dispatch table
"""

from enum import Enum

from ragqa.core.exceptions import ConfigurationError


class EmbeddingFamily(str, Enum):
    """Embedding model families with distinct request shapes."""

    TITAN_TEXT_V1 = "titan-text-v1"
    TITAN_TEXT_V2 = "titan-text-v2"
    GENERIC = "generic"


class GenerationFamily(str, Enum):
    """Generative model families with distinct request shapes."""

    ANTHROPIC = "anthropic"
    META_LLAMA = "meta-llama"
    MISTRAL = "mistral"
    TITAN_TEXT = "titan-text"
    CHAT = "chat"


# Ordered: first matching marker wins.
_EMBEDDING_MARKERS: tuple[tuple[str, EmbeddingFamily], ...] = (
    ("titan-embed-text-v1", EmbeddingFamily.TITAN_TEXT_V1),
    ("titan-embed-text-v2", EmbeddingFamily.TITAN_TEXT_V2),
)

_GENERATION_MARKERS: tuple[tuple[str, GenerationFamily], ...] = (
    ("anthropic.", GenerationFamily.ANTHROPIC),
    ("claude", GenerationFamily.ANTHROPIC),
    ("meta.llama", GenerationFamily.META_LLAMA),
    ("mistral.", GenerationFamily.MISTRAL),
    ("amazon.titan-text", GenerationFamily.TITAN_TEXT),
)

TITAN_V1_DIMENSIONS = 1536
TITAN_V2_DIMENSIONS = frozenset({256, 512, 1024})


def resolve_embedding_family(model_id: str) -> EmbeddingFamily:
    """
    Resolve the embedding family for a model identifier.

    Args:
        model_id: Bedrock embedding model id (may carry a region/profile prefix)

    Returns:
        EmbeddingFamily: Resolved family, GENERIC when nothing matches
    """
    lowered = model_id.lower()
    for marker, family in _EMBEDDING_MARKERS:
        if marker in lowered:
            return family
    return EmbeddingFamily.GENERIC


def resolve_generation_family(model_id: str) -> GenerationFamily:
    """
    Resolve the generation family for a model identifier.

    Args:
        model_id: Bedrock model id or inference profile id

    Returns:
        GenerationFamily: Resolved family, CHAT when nothing matches
    """
    lowered = model_id.lower()
    for marker, family in _GENERATION_MARKERS:
        if marker in lowered:
            return family
    return GenerationFamily.CHAT


def resolve_embedding_dimensions(family: EmbeddingFamily, requested: int) -> int:
    """
    Resolve the effective embedding dimensionality for a family.

    Titan v1 only produces 1536-dimensional vectors; Titan v2 accepts a fixed
    set of sizes; other families use whatever is configured.

    Args:
        family: Resolved embedding family
        requested: Configured dimensionality

    Returns:
        int: Dimensionality every vector must have

    Raises:
        ConfigurationError: Requested size is not allowed for the family
    """
    if family is EmbeddingFamily.TITAN_TEXT_V1:
        return TITAN_V1_DIMENSIONS
    if family is EmbeddingFamily.TITAN_TEXT_V2:
        if requested not in TITAN_V2_DIMENSIONS:
            allowed = ", ".join(str(d) for d in sorted(TITAN_V2_DIMENSIONS))
            raise ConfigurationError(
                f"Titan v2 supports dimensions {allowed} only.",
                {"requested": requested},
            )
        return requested
    if requested <= 0:
        raise ConfigurationError(
            "Embedding dimensionality must be positive",
            {"requested": requested},
        )
    return requested

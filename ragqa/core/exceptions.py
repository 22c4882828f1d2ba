"""
Exception hierarchy for the RAG QA service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Anticipated per-item failures (ExtractionError, EmbeddingError) are caught
and recorded by the ingestion pipeline; everything else propagates.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagQAException(Exception):
    """Base exception for all RAG QA application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(RagQAException):
    """Raised when process configuration is invalid (detected at startup)."""


class ValidationError(RagQAException):
    """Raised when request input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class ExtractionError(RagQAException):
    """Raised when an object cannot be fetched or converted to text."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        extension: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            key: Object key that failed
            extension: File extension used to pick the extractor
            details: Additional context
        """
        details = details or {}
        if key:
            details["key"] = key
        if extension:
            details["extension"] = extension
        self.key = key
        super().__init__(message, details)


class ObjectFetchError(ExtractionError):
    """Raised when an object cannot be downloaded from S3."""


class EmbeddingError(RagQAException):
    """Raised when embedding generation fails."""


class MissingVectorError(EmbeddingError):
    """Raised when the embedding response carries no vector."""


class DimensionMismatchError(EmbeddingError):
    """Raised when a vector does not have the configured dimensionality."""

    def __init__(self, expected: int, actual: int) -> None:
        """
        Initialize dimension mismatch error.

        Args:
            expected: Configured dimensionality
            actual: Length of the offending vector
        """
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding dim mismatch. Got {actual}, expected {expected}.",
            {"expected": expected, "actual": actual},
        )


class GuardrailError(RagQAException):
    """Raised when the guardrail service call fails."""


class GenerationError(RagQAException):
    """Raised when answer generation fails."""


class EmptyAnswerError(GenerationError):
    """Raised when the model response contains no answer text."""


class VectorStoreError(RagQAException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert_document, upsert_chunk, search)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class IngestionTransactionError(RagQAException):
    """Raised when an unexpected failure rolled back an ingestion batch."""

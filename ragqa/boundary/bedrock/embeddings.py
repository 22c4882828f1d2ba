"""
Bedrock embedding client.

Shapes the invoke_model payload by embedding family and validates the
returned vector against the configured dimensionality.

Dependencies: boto3 (bedrock-runtime client), botocore
System role: Embedding adapter for ingestion and chat
"""

import json
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ragqa.configs.runtime import EmbeddingConfig
from ragqa.core.exceptions import DimensionMismatchError, EmbeddingError, MissingVectorError
from ragqa.core.model_family import EmbeddingFamily

logger = logging.getLogger(__name__)


class BedrockEmbeddingClient:
    """Embeds text through bedrock-runtime invoke_model."""

    def __init__(self, runtime_client: Any, config: EmbeddingConfig) -> None:
        """
        Initialize embedding client.

        Args:
            runtime_client: boto3 bedrock-runtime client
            config: Resolved embedding configuration
        """
        self._client = runtime_client
        self._config = config

    @property
    def model_id(self) -> str:
        return self._config.model_id

    @property
    def dimensions(self) -> int:
        return self._config.dimensions

    def _payload(self, text: str) -> dict[str, Any]:
        if self._config.family is EmbeddingFamily.TITAN_TEXT_V2:
            return {
                "inputText": text,
                "dimensions": self._config.dimensions,
                "normalize": self._config.normalize,
            }
        return {"inputText": text}

    def embed(self, text: str) -> list[float]:
        """
        Embed one text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Vector of exactly `dimensions` values

        Raises:
            MissingVectorError: Response carries no vector
            DimensionMismatchError: Vector length differs from configuration
            EmbeddingError: Bedrock call failed
        """
        try:
            response = self._client.invoke_model(
                modelId=self._config.model_id,
                contentType="application/json",
                accept="application/json",
                body=json.dumps(self._payload(text)),
            )
            parsed = json.loads(response["body"].read())
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "%s:embed - Bedrock invoke_model failed",
                __name__,
                extra={"model_id": self._config.model_id, "error": str(e)},
            )
            raise EmbeddingError(
                f"Embedding request failed: {e}",
                {"model_id": self._config.model_id},
            ) from e

        vector = parsed.get("embedding")
        if vector is None:
            vector = (parsed.get("embeddingsByType") or {}).get("float")
        if not isinstance(vector, list):
            raise MissingVectorError(
                "Embedding response missing embedding vector",
                {"model_id": self._config.model_id},
            )
        if len(vector) != self._config.dimensions:
            raise DimensionMismatchError(expected=self._config.dimensions, actual=len(vector))
        return vector

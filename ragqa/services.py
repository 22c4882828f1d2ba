"""
Service container.

Builds the orchestrators and their collaborators once per process from the
application settings. Shared by the HTTP API and the Lambda handler.

Dependencies: ragqa.configs, ragqa.boundary, ragqa.core
System role: Composition root
"""

import logging

from ragqa.boundary.aws.s3_client import S3ObjectStore
from ragqa.boundary.bedrock.client import create_bedrock_runtime_client
from ragqa.boundary.bedrock.embeddings import BedrockEmbeddingClient
from ragqa.boundary.bedrock.generator import BedrockAnswerGenerator
from ragqa.boundary.bedrock.guardrail import BedrockGuardrailFilter
from ragqa.boundary.db.connection import get_engine, get_session_factory
from ragqa.boundary.db.vector_store import VectorStoreGateway
from ragqa.configs import RuntimeConfig, Settings, build_runtime_config, get_settings
from ragqa.core.chat.orchestrator import ChatOrchestrator
from ragqa.core.extraction import TextExtractor
from ragqa.core.ingestion.orchestrator import IngestionOrchestrator

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._runtime_config = None
        self._bedrock_client = None
        self._gateway = None
        self._embedder = None
        self._ingestion = None
        self._chat = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def runtime_config(self) -> RuntimeConfig:
        """Resolved configuration; raises ConfigurationError on first access if invalid."""
        if self._runtime_config is None:
            self._runtime_config = build_runtime_config(self.settings)
        return self._runtime_config

    @property
    def bedrock_client(self):
        """Get cached bedrock-runtime client."""
        if self._bedrock_client is None:
            self._bedrock_client = create_bedrock_runtime_client(self.settings.bedrock)
        return self._bedrock_client

    @property
    def gateway(self) -> VectorStoreGateway:
        """Get cached vector store gateway (owns the engine pool)."""
        if self._gateway is None:
            config = self.runtime_config
            engine = get_engine(self.settings.database)
            self._gateway = VectorStoreGateway(
                get_session_factory(engine), config.embedding.dimensions
            )
        return self._gateway

    @property
    def embedder(self) -> BedrockEmbeddingClient:
        if self._embedder is None:
            self._embedder = BedrockEmbeddingClient(
                self.bedrock_client, self.runtime_config.embedding
            )
        return self._embedder

    @property
    def ingestion(self) -> IngestionOrchestrator:
        """Get cached ingestion orchestrator."""
        if self._ingestion is None:
            self._ingestion = IngestionOrchestrator(
                config=self.runtime_config,
                object_store=S3ObjectStore(region=self.settings.bedrock.region),
                extractor=TextExtractor(),
                embedder=self.embedder,
                gateway=self.gateway,
            )
        return self._ingestion

    @property
    def chat(self) -> ChatOrchestrator:
        """Get cached chat orchestrator."""
        if self._chat is None:
            config = self.runtime_config
            self._chat = ChatOrchestrator(
                config=config,
                guardrail=BedrockGuardrailFilter(self.bedrock_client, config.guardrail),
                embedder=self.embedder,
                gateway=self.gateway,
                generator=BedrockAnswerGenerator(self.bedrock_client, config.generation),
            )
        return self._chat

    def clear(self) -> None:
        """Clear all cached instances."""
        self._runtime_config = None
        self._bedrock_client = None
        self._gateway = None
        self._embedder = None
        self._ingestion = None
        self._chat = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache

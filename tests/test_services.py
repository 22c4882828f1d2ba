"""
Tests for the service container and database connection helpers.
"""

from unittest.mock import patch

import pytest

from ragqa import services as services_module
from ragqa.boundary.db.connection import build_connect_args
from ragqa.configs.bedrock import BedrockSettings, GuardrailSettings
from ragqa.configs.database import DatabaseSettings
from ragqa.configs.settings import Settings
from ragqa.core.chat.orchestrator import ChatOrchestrator
from ragqa.core.exceptions import ConfigurationError
from ragqa.core.ingestion.orchestrator import IngestionOrchestrator
from ragqa.services import ServiceCache


@pytest.fixture
def settings() -> Settings:
    """Provide complete settings."""
    return Settings(
        database=DatabaseSettings(url="postgresql://u:p@db/rag"),
        bedrock=BedrockSettings(
            model_id="anthropic.claude-3-haiku-20240307-v1:0",
            embed_model_id="amazon.titan-embed-text-v1",
            region="us-east-1",
        ),
        guardrail=GuardrailSettings(id="gr", version="1"),
    )


@pytest.fixture
def patched_boundaries():
    """Patch AWS and database factories used by the container."""
    with patch.object(services_module, "create_bedrock_runtime_client") as bedrock, patch.object(
        services_module, "get_engine"
    ) as engine, patch.object(services_module, "get_session_factory") as factory, patch.object(
        services_module, "S3ObjectStore"
    ) as s3:
        yield {"bedrock": bedrock, "engine": engine, "factory": factory, "s3": s3}


class TestServiceCache:
    """Test lazy construction and caching."""

    def test_builds_orchestrators_once(self, settings, patched_boundaries) -> None:
        """Should share one bedrock client and gateway across orchestrators."""
        cache = ServiceCache(settings)

        ingestion = cache.ingestion
        chat = cache.chat

        assert isinstance(ingestion, IngestionOrchestrator)
        assert isinstance(chat, ChatOrchestrator)
        assert cache.ingestion is ingestion
        assert cache.chat is chat
        patched_boundaries["bedrock"].assert_called_once()
        patched_boundaries["engine"].assert_called_once_with(settings.database)
        assert cache.gateway is cache.gateway
        assert cache.embedder.dimensions == 1536

    def test_clear_rebuilds(self, settings, patched_boundaries) -> None:
        """Should rebuild services after clear()."""
        cache = ServiceCache(settings)
        first = cache.chat

        cache.clear()

        assert cache.chat is not first

    def test_invalid_configuration(self, patched_boundaries) -> None:
        """Should raise ConfigurationError on first access."""
        cache = ServiceCache(
            Settings(
                database=DatabaseSettings(url="postgresql://u:p@db/rag"),
                bedrock=BedrockSettings(model_id=""),
            )
        )

        with pytest.raises(ConfigurationError):
            _ = cache.chat
        patched_boundaries["engine"].assert_not_called()


class TestBuildConnectArgs:
    """Test psycopg2 connect arguments."""

    def test_tls_when_bundle_exists(self, tmp_path) -> None:
        """Should verify the server certificate when the CA bundle exists."""
        bundle = tmp_path / "ca.pem"
        bundle.write_text("cert")

        args = build_connect_args(DatabaseSettings(url="x", ssl_ca_path=str(bundle)))

        assert args["sslmode"] == "verify-full"
        assert args["sslrootcert"] == str(bundle)

    def test_plain_when_bundle_missing(self, tmp_path) -> None:
        """Should only set the timeout when no bundle is present."""
        args = build_connect_args(
            DatabaseSettings(url="x", ssl_ca_path=str(tmp_path / "missing.pem"), connect_timeout=3)
        )

        assert args == {"connect_timeout": 3}

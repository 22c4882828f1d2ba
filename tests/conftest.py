"""
Shared test fixtures and configuration for entire test suite.

Provides: Runtime configuration, an in-memory transactional vector store,
fake S3 object store and Bedrock collaborator mocks
Dependencies: pytest, unittest.mock
System role: Test infrastructure and fixture management
"""

from contextlib import contextmanager
import json
from unittest.mock import MagicMock

import pytest

from ragqa.boundary.aws.s3_client import ObjectSummary
from ragqa.boundary.bedrock.guardrail import GuardrailVerdict
from ragqa.configs.runtime import (
    EmbeddingConfig,
    GenerationConfig,
    GuardrailConfig,
    RuntimeConfig,
)
from ragqa.core.exceptions import DimensionMismatchError, ObjectFetchError
from ragqa.core.model_family import EmbeddingFamily, GenerationFamily
from ragqa.models.citation import SearchHit

TEST_DIMENSIONS = 4


class FakeStore:
    """VectorStore double that writes into a pending buffer."""

    def __init__(self, gateway: "FakeGateway", pending: dict | None) -> None:
        self._gateway = gateway
        self._pending = pending
        self.search_calls: list[tuple[list[float], int]] = []

    def upsert_document(self, doc) -> None:
        self._pending["documents"][doc.doc_id] = doc

    def upsert_chunk(self, chunk) -> None:
        if len(chunk.embedding) != self._gateway.dimensions:
            raise DimensionMismatchError(
                expected=self._gateway.dimensions, actual=len(chunk.embedding)
            )
        self._pending["chunks"][(chunk.doc_id, chunk.chunk_id)] = chunk

    def similarity_search(self, query_embedding, k):
        self.search_calls.append((query_embedding, k))
        return list(self._gateway.search_hits[:k])


class FakeGateway:
    """In-memory VectorStoreGateway: commits on clean exit, discards on error."""

    def __init__(self, dimensions: int = TEST_DIMENSIONS) -> None:
        self.dimensions = dimensions
        self.documents: dict = {}
        self.chunks: dict = {}
        self.search_hits: list[SearchHit] = []
        self.transactions = 0
        self.commits = 0
        self.rollbacks = 0
        self.readers: list[FakeStore] = []

    @contextmanager
    def transaction(self):
        self.transactions += 1
        pending = {"documents": {}, "chunks": {}}
        try:
            yield FakeStore(self, pending)
        except Exception:
            self.rollbacks += 1
            raise
        self.documents.update(pending["documents"])
        self.chunks.update(pending["chunks"])
        self.commits += 1

    @contextmanager
    def reader(self):
        store = FakeStore(self, None)
        self.readers.append(store)
        yield store

    def ping(self) -> None:
        return None


class FakeObjectStore:
    """S3ObjectStore double backed by a dict of key -> bytes."""

    def __init__(self, objects: dict[str, bytes] | None = None) -> None:
        self.objects: dict[str, bytes] = dict(objects or {})
        self.sizes: dict[str, int] = {}
        self.failing: set[str] = set()
        self.fetched: list[str] = []

    def list_objects(self, bucket: str, prefix: str = ""):
        return [
            ObjectSummary(key=key, size=self.sizes.get(key, len(data)))
            for key, data in self.objects.items()
            if key.startswith(prefix)
        ]

    def get_object(self, bucket: str, key: str) -> bytes:
        self.fetched.append(key)
        if key in self.failing:
            raise ObjectFetchError("Failed to fetch object: AccessDenied", key=key)
        return self.objects[key]


@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """Provide a small resolved configuration."""
    return RuntimeConfig(
        embedding=EmbeddingConfig(
            model_id="test-embed",
            family=EmbeddingFamily.GENERIC,
            dimensions=TEST_DIMENSIONS,
        ),
        generation=GenerationConfig(model_id="test-chat", family=GenerationFamily.CHAT),
        guardrail=GuardrailConfig(identifier="gr-test", version="1"),
        chunk_size=1200,
        chunk_overlap=200,
        default_top_k=6,
        max_context_chars=12000,
        max_ingest_files=50,
    )


@pytest.fixture
def fake_gateway() -> FakeGateway:
    """Provide in-memory transactional vector store gateway."""
    return FakeGateway()


@pytest.fixture
def fake_object_store() -> FakeObjectStore:
    """Provide empty fake S3 object store."""
    return FakeObjectStore()


@pytest.fixture
def mock_embedder() -> MagicMock:
    """Provide embedder returning a fixed vector of the test dimensionality."""
    embedder = MagicMock()
    embedder.model_id = "test-embed"
    embedder.dimensions = TEST_DIMENSIONS
    embedder.embed.return_value = [0.1, 0.2, 0.3, 0.4]
    return embedder


@pytest.fixture
def mock_guardrail() -> MagicMock:
    """Provide guardrail that passes content through unchanged."""
    guardrail = MagicMock()
    guardrail.apply.side_effect = lambda source, text: GuardrailVerdict(
        blocked=False, text=text, action="NONE"
    )
    return guardrail


@pytest.fixture
def mock_generator() -> MagicMock:
    """Provide answer generator mock."""
    generator = MagicMock()
    generator.generate.return_value = "Paris is the capital."
    return generator


@pytest.fixture
def bedrock_body():
    """Build a bedrock-runtime invoke_model response from a JSON-able dict."""

    def _build(payload: dict) -> dict:
        body = MagicMock()
        body.read.return_value = json.dumps(payload).encode("utf-8")
        return {"body": body}

    return _build

"""
Dependency injection container.

Factory functions for FastAPI dependencies. Route tests override these
with app.dependency_overrides.

Dependencies: ragqa.services
System role: DI container for service injection
"""

from fastapi import Depends

from ragqa.boundary.db.vector_store import VectorStoreGateway
from ragqa.core.chat.orchestrator import ChatOrchestrator
from ragqa.core.ingestion.orchestrator import IngestionOrchestrator
from ragqa.services import ServiceCache, get_service_cache


def get_ingestion_orchestrator(
    cache: ServiceCache = Depends(get_service_cache),
) -> IngestionOrchestrator:
    """
    Get ingestion orchestrator instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        IngestionOrchestrator: Cached orchestrator
    """
    return cache.ingestion


def get_chat_orchestrator(
    cache: ServiceCache = Depends(get_service_cache),
) -> ChatOrchestrator:
    """
    Get chat orchestrator instance.

    Args:
        cache: Service cache (injected via Depends)

    Returns:
        ChatOrchestrator: Cached orchestrator
    """
    return cache.chat


def get_gateway(cache: ServiceCache = Depends(get_service_cache)) -> VectorStoreGateway:
    """Get the vector store gateway."""
    return cache.gateway

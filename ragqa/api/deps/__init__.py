"""FastAPI dependency providers."""

from .dependencies import get_chat_orchestrator, get_gateway, get_ingestion_orchestrator

__all__ = ["get_chat_orchestrator", "get_gateway", "get_ingestion_orchestrator"]

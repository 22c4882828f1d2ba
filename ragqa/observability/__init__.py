"""Observability helpers: logging setup, request ID context and log utilities."""

from ragqa.observability.correlation import clear_request_id, get_request_id, set_request_id
from ragqa.observability.log_utils import log_exception_with_context, vector_preview
from ragqa.observability.logger import configure_logging

__all__ = [
    "clear_request_id",
    "configure_logging",
    "get_request_id",
    "log_exception_with_context",
    "set_request_id",
    "vector_preview",
]

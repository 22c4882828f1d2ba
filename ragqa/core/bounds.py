"""
Request limit ranges.

Caller-supplied sizes are clamped into these ranges rather than rejected.

Dependencies: None
System role: Shared request bounds for the ingestion and chat pipelines
"""

MAX_INGEST_FILES_RANGE = (1, 500)
TOP_K_RANGE = (1, 20)
MAX_CONTEXT_CHARS_RANGE = (1000, 50000)


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, int(value)))

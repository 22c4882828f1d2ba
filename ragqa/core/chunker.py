"""
Deterministic text chunker.

Splits text into overlapping character windows. Pure function, no I/O.

Dependencies: None
System role: Ingestion chunking stage
"""

from collections.abc import Iterator

from ragqa.core.exceptions import ConfigurationError


def normalize_text(text: str) -> str:
    """Normalise line endings and drop NUL characters."""
    return (text or "").replace("\r\n", "\n").replace("\x00", "")


def chunk_text(text: str, size: int, overlap: int) -> Iterator[str]:
    """
    Yield trimmed, non-empty windows of at most `size` characters.

    Consecutive windows share `overlap` characters. When overlap >= size the
    cursor jumps to the end of the previous window so the loop always
    terminates.

    Args:
        text: Raw text
        size: Window size in characters
        overlap: Characters shared by consecutive windows

    Yields:
        str: Trimmed window text

    Raises:
        ConfigurationError: size <= 0 or overlap < 0
    """
    if size <= 0:
        raise ConfigurationError("chunk size must be positive", {"size": size})
    if overlap < 0:
        raise ConfigurationError("chunk overlap must not be negative", {"overlap": overlap})

    clean = normalize_text(text)
    length = len(clean)
    cursor = 0
    while cursor < length:
        end = min(length, cursor + size)
        window = clean[cursor:end].strip()
        if window:
            yield window
        if end == length:
            break
        next_cursor = max(0, end - overlap)
        if next_cursor <= cursor:
            next_cursor = end
        cursor = next_cursor

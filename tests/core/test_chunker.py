"""
Tests for the deterministic text chunker.

Verifies window boundaries, overlap handling, termination and trimming.
"""

import pytest

from ragqa.core.chunker import chunk_text, normalize_text
from ragqa.core.exceptions import ConfigurationError


def _alphabet(length: int) -> str:
    return "".join(chr(97 + i % 26) for i in range(length))


class TestChunkText:
    """Test chunk_text windowing."""

    def test_windows_overlap_by_configured_amount(self) -> None:
        """Should produce [0,1200), [1000,2200), [2000,3000) for 3000 chars."""
        text = _alphabet(3000)

        windows = list(chunk_text(text, 1200, 200))

        assert windows == [text[0:1200], text[1000:2200], text[2000:3000]]

    def test_short_text_is_single_window(self) -> None:
        """Should return the whole text when it fits in one window."""
        assert list(chunk_text("hello world", 1200, 200)) == ["hello world"]

    def test_empty_text_yields_nothing(self) -> None:
        """Should yield no windows for empty or None text."""
        assert list(chunk_text("", 100, 10)) == []
        assert list(chunk_text(None, 100, 10)) == []

    def test_overlap_not_smaller_than_size_terminates(self) -> None:
        """Should advance to the previous window end when overlap >= size."""
        text = _alphabet(25)

        windows = list(chunk_text(text, 10, 10))

        assert windows == [text[0:10], text[10:20], text[20:25]]

    def test_overlap_larger_than_size_terminates(self) -> None:
        """Should not loop forever when overlap exceeds size."""
        text = _alphabet(30)

        windows = list(chunk_text(text, 10, 50))

        assert windows == [text[0:10], text[10:20], text[20:30]]

    def test_blank_windows_are_dropped_and_windows_trimmed(self) -> None:
        """Should trim each window and skip whitespace-only ones."""
        text = "abc" + " " * 20 + "def"

        windows = list(chunk_text(text, 5, 0))

        assert windows == ["abc", "de", "f"]
        assert all(w == w.strip() and w for w in windows)

    def test_windows_never_exceed_size(self) -> None:
        """Should keep every window within the size limit."""
        windows = list(chunk_text(_alphabet(5000), 700, 150))

        assert windows
        assert all(len(w) <= 700 for w in windows)

    @pytest.mark.parametrize(
        "size,overlap,length",
        [
            (1200, 200, 3000),
            (100, 0, 1000),
            (100, 99, 350),
            (7, 3, 50),
            (500, 1, 501),
            (64, 32, 64),
            (10, 5, 3),
        ],
    )
    def test_windows_reassemble_text(self, size: int, overlap: int, length: int) -> None:
        """Should rebuild the text once the overlap is removed from later windows."""
        text = _alphabet(length)

        windows = list(chunk_text(text, size, overlap))

        rebuilt = windows[0] + "".join(w[overlap:] for w in windows[1:])
        assert rebuilt == text
        assert all(len(w) <= size for w in windows)

    def test_is_deterministic(self) -> None:
        """Should produce identical output for identical input."""
        text = _alphabet(4321)

        assert list(chunk_text(text, 500, 50)) == list(chunk_text(text, 500, 50))

    @pytest.mark.parametrize("size,overlap", [(0, 0), (-5, 0), (100, -1)])
    def test_invalid_parameters_raise(self, size: int, overlap: int) -> None:
        """Should reject non-positive size and negative overlap."""
        with pytest.raises(ConfigurationError):
            list(chunk_text("some text", size, overlap))


class TestNormalizeText:
    """Test normalize_text."""

    def test_crlf_and_nul_are_normalised(self) -> None:
        """Should convert CRLF to LF and drop NUL characters."""
        assert normalize_text("a\r\nb\x00c") == "a\nbc"

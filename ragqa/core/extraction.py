"""
Text extraction from raw object bytes.

Selects an extraction strategy by file extension: plain UTF-8 decoding for
text formats, pypdf for PDF and python-docx for Word documents. Unknown
extensions are decoded as text rather than rejected.

Dependencies: pypdf, python-docx
System role: Ingestion extraction stage
"""

import io
import logging
from collections.abc import Callable
from dataclasses import dataclass

from docx import Document as DocxDocument
from pypdf import PdfReader

from ragqa.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({"pdf", "docx", "txt", "md", "json", "csv"})


@dataclass(frozen=True)
class ExtractedText:
    """Text extracted from one object."""

    text: str
    byte_length: int
    extension: str


def extension_of(key: str) -> str:
    """
    Return the lower-cased suffix after the last dot of an object key.

    Args:
        key: Object key or filename

    Returns:
        str: Extension without the dot, "" when the key has none
    """
    _, dot, suffix = key.rpartition(".")
    return suffix.lower() if dot else ""


def _decode_utf8(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _extract_pdf(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def _extract_docx(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    return "\n".join(para.text for para in doc.paragraphs)


Extractor = Callable[[bytes], str]


class TextExtractor:
    """Extension-indexed byte-to-text conversion."""

    def __init__(
        self,
        strategies: dict[str, Extractor] | None = None,
        default: Extractor = _decode_utf8,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            strategies: Extension to extractor mapping (defaults to the built-in table)
            default: Extractor for extensions absent from the table
        """
        self._strategies = strategies if strategies is not None else {
            "txt": _decode_utf8,
            "md": _decode_utf8,
            "csv": _decode_utf8,
            "json": _decode_utf8,
            "pdf": _extract_pdf,
            "docx": _extract_docx,
        }
        self._default = default

    def extract(self, data: bytes, extension: str) -> ExtractedText:
        """
        Convert object bytes to text.

        Args:
            data: Raw object bytes
            extension: Lower-case file extension

        Returns:
            ExtractedText: Untrimmed text with the source byte length

        Raises:
            ExtractionError: The parser rejected the bytes
        """
        strategy = self._strategies.get(extension, self._default)
        try:
            text = strategy(data)
        except Exception as e:
            logger.warning(
                "%s:extract - Parser failed",
                __name__,
                extra={"extension": extension, "bytes": len(data), "error": str(e)},
            )
            raise ExtractionError(
                f"Failed to extract text: {e}",
                extension=extension,
            ) from e
        return ExtractedText(text=text, byte_length=len(data), extension=extension)

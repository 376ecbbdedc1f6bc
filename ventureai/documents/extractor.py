"""
Document Text Extraction

Turns one stored upload into plain text for the generation context:
- Plain text family (TXT, CSV, Markdown, JSON, HTML, XML): decoded as-is
- PDF (via pypdf)
- Word documents (via python-docx)
- Spreadsheets and presentations: fixed placeholder, content is not parsed

Extraction never raises. A malformed or missing file yields an empty string
so a single bad upload cannot abort the surrounding request.
"""

from __future__ import annotations

import io
from enum import Enum
from pathlib import Path

import structlog

logger = structlog.get_logger()

SPREADSHEET_PLACEHOLDER = "[Spreadsheet — content unavailable for text analysis]"
PRESENTATION_PLACEHOLDER = "[Presentation — content unavailable for text analysis]"


class DocumentKind(str, Enum):
    """Extraction category derived from a declared MIME type."""

    TEXT = "text"
    PDF = "pdf"
    WORD = "word"
    SPREADSHEET = "spreadsheet"
    PRESENTATION = "presentation"
    UNSUPPORTED = "unsupported"


_TEXT_MIME_TYPES = (
    "text/plain",
    "text/csv",
    "text/markdown",
    "application/json",
    "text/html",
    "text/xml",
    "application/xml",
)
_WORD_MIME_TYPES = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml",
    "application/msword",
)
_SPREADSHEET_MIME_TYPES = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml",
    "application/vnd.ms-excel",
)
_PRESENTATION_MIME_TYPES = (
    "application/vnd.openxmlformats-officedocument.presentationml",
    "application/vnd.ms-powerpoint",
)


def _matches(mime_type: str, candidates: tuple[str, ...]) -> bool:
    return any(candidate in mime_type for candidate in candidates)


def classify_mime_type(mime_type: str | None) -> DocumentKind:
    """Map a declared MIME type (possibly with parameters) to a DocumentKind."""
    normalized = (mime_type or "").strip().lower()
    if not normalized:
        return DocumentKind.UNSUPPORTED
    if _matches(normalized, _TEXT_MIME_TYPES):
        return DocumentKind.TEXT
    if "application/pdf" in normalized:
        return DocumentKind.PDF
    if _matches(normalized, _WORD_MIME_TYPES):
        return DocumentKind.WORD
    if _matches(normalized, _SPREADSHEET_MIME_TYPES):
        return DocumentKind.SPREADSHEET
    if _matches(normalized, _PRESENTATION_MIME_TYPES):
        return DocumentKind.PRESENTATION
    return DocumentKind.UNSUPPORTED


def _extract_pdf(content_bytes: bytes) -> str:
    """Extract text from PDF."""
    try:
        from pypdf import PdfReader

        reader = PdfReader(io.BytesIO(content_bytes))
        pages = []
        for page in reader.pages:
            text = page.extract_text()
            if text:
                pages.append(text)
        return "\n\n".join(pages)
    except Exception as e:
        logger.warning("Failed to extract PDF", error=str(e))
        return ""


def _extract_word(content_bytes: bytes) -> str:
    """Extract paragraphs and table rows from a Word document."""
    try:
        from docx import Document as DocxDocument

        doc = DocxDocument(io.BytesIO(content_bytes))
        paragraphs = [para.text for para in doc.paragraphs if para.text.strip()]

        for table in doc.tables:
            for row in table.rows:
                paragraphs.append(" | ".join(cell.text for cell in row.cells))

        return "\n\n".join(paragraphs)
    except Exception as e:
        # Legacy .doc binaries land here too; python-docx only reads OOXML.
        logger.warning("Failed to extract Word document", error=str(e))
        return ""


def extract_text(path: str | Path | None, mime_type: str | None) -> str:
    """
    Extract plain text from a stored file.

    Args:
        path: Local filesystem path of the upload (None means unresolvable)
        mime_type: Declared MIME type of the upload

    Returns:
        Extracted text, a fixed placeholder for spreadsheets/presentations,
        or "" for unsupported types, missing files and parse failures.
    """
    kind = classify_mime_type(mime_type)

    # Placeholders do not depend on file contents.
    if kind is DocumentKind.SPREADSHEET:
        return SPREADSHEET_PLACEHOLDER if _exists(path) else ""
    if kind is DocumentKind.PRESENTATION:
        return PRESENTATION_PLACEHOLDER if _exists(path) else ""
    if kind is DocumentKind.UNSUPPORTED or not _exists(path):
        return ""

    try:
        content_bytes = Path(path).read_bytes()  # type: ignore[arg-type]
    except OSError as e:
        logger.warning("Failed to read document", path=str(path), error=str(e))
        return ""

    if kind is DocumentKind.TEXT:
        return content_bytes.decode("utf-8", errors="replace")
    if kind is DocumentKind.PDF:
        return _extract_pdf(content_bytes)
    return _extract_word(content_bytes)


def _exists(path: str | Path | None) -> bool:
    if path is None:
        return False
    try:
        return Path(path).is_file()
    except OSError:
        return False

"""Value types for uploaded documents and their extracted text."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ventureai.kernel.time import utc_now


@dataclass(frozen=True)
class Document:
    """An uploaded file owned by a venture. Immutable once created."""

    id: str
    display_name: str
    storage_reference: str
    byte_size: int
    mime_type: str
    created_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class ExtractedDocument:
    """Request-scoped extracted text for one document.

    `text` never exceeds the per-document cap; the truncation marker is
    added only when the context string is rendered.
    """

    source_document_id: str
    display_name: str
    text: str
    truncated: bool


@dataclass(frozen=True)
class DocumentContext:
    """Result of budget allocation over an ordered list of documents."""

    text: str
    included: tuple[ExtractedDocument, ...] = ()
    total_documents: int = 0

    @property
    def included_chars(self) -> int:
        return sum(len(doc.text) for doc in self.included)

    @property
    def truncation_flags(self) -> dict[str, bool]:
        return {doc.source_document_id: doc.truncated for doc in self.included}


EMPTY_DOCUMENT_CONTEXT = DocumentContext(text="")

"""Uploaded document handling: text extraction and context budgets."""

from .budget import TRUNCATION_MARKER, ContentBudgetAllocator
from .extractor import (
    PRESENTATION_PLACEHOLDER,
    SPREADSHEET_PLACEHOLDER,
    DocumentKind,
    classify_mime_type,
    extract_text,
)
from .models import Document, DocumentContext, ExtractedDocument
from .repository import DocumentRepository, InMemoryDocumentRepository
from .storage import DocumentStorage

__all__ = [
    # Models
    "Document",
    "DocumentContext",
    "ExtractedDocument",
    # Extraction
    "DocumentKind",
    "classify_mime_type",
    "extract_text",
    "SPREADSHEET_PLACEHOLDER",
    "PRESENTATION_PLACEHOLDER",
    # Budgets
    "ContentBudgetAllocator",
    "TRUNCATION_MARKER",
    # Collaborators
    "DocumentRepository",
    "InMemoryDocumentRepository",
    "DocumentStorage",
]

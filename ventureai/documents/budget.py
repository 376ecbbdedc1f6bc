"""Character budgets for document context.

Documents are handled in caller order (most recent first). Each document is
cut to the per-document cap; the running total of included characters never
exceeds the aggregate cap, and once a document no longer fits nothing after
it is included. Empty extractions are skipped without consuming budget.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence

import structlog

from ventureai.documents.extractor import classify_mime_type
from ventureai.documents.models import Document, DocumentContext, ExtractedDocument
from ventureai.monitoring import get_metrics

logger = structlog.get_logger()

TRUNCATION_MARKER = "\n... [document truncated]"

TextExtractor = Callable[[Document], str]


def truncate_text(text: str, cap: int) -> tuple[str, bool]:
    """Cut `text` to `cap` characters. Exactly `cap` characters is not truncation."""
    if len(text) > cap:
        return text[:cap], True
    return text, False


def render_document_context(included: Sequence[ExtractedDocument], total_documents: int) -> str:
    """Concatenate included documents with ordinal headers and truncation markers."""
    if not included:
        return ""

    parts = []
    for ordinal, doc in enumerate(included, start=1):
        body = doc.text + (TRUNCATION_MARKER if doc.truncated else "")
        parts.append(f'--- Document {ordinal}: "{doc.display_name}" ---\n{body}')

    return f"\n\nVenture documents ({len(included)} of {total_documents}):\n\n" + "\n\n".join(parts)


class ContentBudgetAllocator:
    """Extracts, truncates and concatenates documents under character caps."""

    def __init__(
        self,
        extract: TextExtractor,
        *,
        per_doc_cap: int,
        aggregate_cap: int,
    ):
        if per_doc_cap <= 0 or aggregate_cap <= 0:
            raise ValueError("Budget caps must be positive")
        self.extract = extract
        self.per_doc_cap = per_doc_cap
        self.aggregate_cap = aggregate_cap

    def allocate(self, documents: Sequence[Document]) -> DocumentContext:
        """Extract sequentially; stops extracting once the budget is spent."""
        return self._account(documents, lambda _index, doc: self._extract_safely(doc))

    async def allocate_async(self, documents: Sequence[Document]) -> DocumentContext:
        """
        Extract all documents concurrently in worker threads.

        Inclusion and truncation are decided afterwards in input order, so the
        result is identical to `allocate`.
        """
        if not documents:
            return self._account(documents, lambda _index, doc: "")

        texts = await asyncio.gather(
            *(asyncio.to_thread(self._extract_safely, doc) for doc in documents)
        )
        return self._account(documents, lambda index, _doc: texts[index])

    def _extract_safely(self, document: Document) -> str:
        """A failing document counts as empty; it never aborts the others."""
        try:
            return self.extract(document)
        except Exception as e:
            logger.warning(
                "Document extraction raised, skipping",
                document_id=document.id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return ""

    def _account(
        self,
        documents: Sequence[Document],
        text_for: Callable[[int, Document], str],
    ) -> DocumentContext:
        metrics = get_metrics()
        included: list[ExtractedDocument] = []
        total_chars = 0
        stopped_at: int | None = None

        for index, doc in enumerate(documents):
            if total_chars >= self.aggregate_cap:
                stopped_at = index
                break

            text = text_for(index, doc) or ""
            metrics.track_document_extraction(classify_mime_type(doc.mime_type).value, bool(text))
            if not text:
                continue

            body, truncated = truncate_text(text, self.per_doc_cap)
            if total_chars + len(body) > self.aggregate_cap:
                # Partial inclusion is not allowed.
                stopped_at = index
                break

            included.append(
                ExtractedDocument(
                    source_document_id=doc.id,
                    display_name=doc.display_name,
                    text=body,
                    truncated=truncated,
                )
            )
            total_chars += len(body)

        if stopped_at is not None:
            logger.info(
                "Document budget exhausted",
                included=len(included),
                skipped=len(documents) - stopped_at,
                aggregate_cap=self.aggregate_cap,
            )

        metrics.track_document_context(total_chars)
        return DocumentContext(
            text=render_document_context(included, len(documents)),
            included=tuple(included),
            total_documents=len(documents),
        )

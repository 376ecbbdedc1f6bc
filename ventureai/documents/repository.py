from __future__ import annotations

from collections import defaultdict
from typing import Protocol

from ventureai.documents.models import Document
from ventureai.kernel.time import coerce_utc


class DocumentRepository(Protocol):
    """Read access to a venture's uploaded documents."""

    def list_for(self, owner_id: str, limit: int) -> list[Document]:
        """Return up to `limit` documents, most recently created first."""
        ...


class InMemoryDocumentRepository:
    """Process-local repository used by the HTTP surface and tests."""

    def __init__(self) -> None:
        self._documents: dict[str, list[Document]] = defaultdict(list)

    def add(self, owner_id: str, document: Document) -> None:
        self._documents[owner_id].append(document)

    def list_for(self, owner_id: str, limit: int) -> list[Document]:
        documents = sorted(
            self._documents.get(owner_id, []),
            key=lambda doc: coerce_utc(doc.created_at),
            reverse=True,
        )
        return documents[: max(limit, 0)]

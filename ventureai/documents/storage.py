"""Local storage helpers for uploaded venture documents.

Uploads are stored under a single root directory and referenced by a
root-relative path such as `/uploads/<venture>/<file>`. Resolution never
escapes the root.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from ventureai.documents.models import Document

logger = structlog.get_logger()


class DocumentStorage:
    """Resolves a document's storage reference to a local file path."""

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def resolve(self, storage_reference: str) -> Path | None:
        """
        Resolve a storage reference to an absolute path under the root.

        Returns None for empty references, for references the filesystem
        cannot represent (e.g. an embedded NUL byte) and for references that
        would escape the root (e.g. `../../etc/passwd`). The extractor treats
        None the same as a missing file.
        """
        reference = (storage_reference or "").strip().replace("\\", "/").lstrip("/")
        if not reference or "\x00" in reference:
            return None

        try:
            candidate = (self.root / reference).resolve()
        except (OSError, ValueError) as e:
            logger.warning("Unresolvable storage reference", reference=storage_reference, error=str(e))
            return None

        if candidate != self.root and self.root not in candidate.parents:
            logger.warning("Rejected storage reference outside uploads root", reference=storage_reference)
            return None
        return candidate

    def path_for(self, document: Document) -> Path | None:
        return self.resolve(document.storage_reference)

"""API route modules."""

from . import ai, documents, health

__all__ = [
    "ai",
    "documents",
    "health",
]

"""Application services."""

from .venture_ai import VentureAIService

__all__ = ["VentureAIService"]

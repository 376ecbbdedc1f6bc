"""Conversation history and context assembly."""

from .assembler import DEFAULT_HISTORY_WINDOW, ContextAssembler
from .models import ContextBundle, ConversationTurn, Role
from .store import ConversationStore, InMemoryConversationStore, record_turn

__all__ = [
    "ContextAssembler",
    "ContextBundle",
    "ConversationStore",
    "ConversationTurn",
    "DEFAULT_HISTORY_WINDOW",
    "InMemoryConversationStore",
    "Role",
    "record_turn",
]

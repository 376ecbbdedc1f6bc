"""Conversation persistence boundary.

The pipeline only needs append and "most recent N" reads. Real deployments
back this with the relational store; the in-memory store serves the HTTP
surface and tests.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Protocol

import structlog

from ventureai.conversation.models import ConversationTurn, Role

logger = structlog.get_logger()


class ConversationStore(Protocol):
    def append_turn(self, conversation_id: str, role: Role, content: str) -> ConversationTurn:
        """Persist a turn. May raise; callers treat failures as non-fatal."""
        ...

    def recent_turns(self, conversation_id: str, limit: int) -> list[ConversationTurn]:
        """Return up to `limit` turns, most recent first."""
        ...

    def history(self, conversation_id: str) -> list[ConversationTurn]:
        """Return every turn in chronological order."""
        ...


class InMemoryConversationStore:
    def __init__(self) -> None:
        self._turns: dict[str, list[ConversationTurn]] = defaultdict(list)
        self._lock = threading.Lock()

    def append_turn(self, conversation_id: str, role: Role, content: str) -> ConversationTurn:
        turn = ConversationTurn(role=Role(role), content=content)
        with self._lock:
            self._turns[conversation_id].append(turn)
        return turn

    def recent_turns(self, conversation_id: str, limit: int) -> list[ConversationTurn]:
        if limit <= 0:
            return []
        with self._lock:
            turns = list(self._turns.get(conversation_id, []))
        return list(reversed(turns[-limit:]))

    def history(self, conversation_id: str) -> list[ConversationTurn]:
        with self._lock:
            return list(self._turns.get(conversation_id, []))


def record_turn(
    store: ConversationStore,
    conversation_id: str,
    role: Role,
    content: str,
) -> ConversationTurn | None:
    """Best-effort append. Failures are logged and swallowed."""
    try:
        return store.append_turn(conversation_id, role, content)
    except Exception as exc:
        logger.error(
            "Failed to persist conversation turn",
            conversation_id=conversation_id,
            role=role.value,
            error=str(exc),
        )
        return None

"""Context assembly for chat generation.

Only the two most recent persisted turns are carried into a new request.
This keeps token usage predictable at the cost of long-range memory.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from ventureai.conversation.models import ContextBundle, ConversationTurn, Role
from ventureai.conversation.store import ConversationStore
from ventureai.kernel.errors import InvalidTurnError

logger = structlog.get_logger()

DEFAULT_HISTORY_WINDOW = 2


class ContextAssembler:
    def __init__(self, store: ConversationStore, history_window: int = DEFAULT_HISTORY_WINDOW):
        if history_window < 0:
            raise ValueError("history_window must be >= 0")
        self.store = store
        self.history_window = history_window

    def assemble(
        self,
        conversation_id: str,
        new_turn: ConversationTurn,
        profile_fields: Mapping[str, str],
        document_context: str = "",
    ) -> ContextBundle:
        """
        Build the ContextBundle for a new user turn.

        Must be called before the new turn is persisted, otherwise it would
        appear twice (once in history, once as `new_turn`).

        Raises:
            InvalidTurnError: if `new_turn` is not a user turn
        """
        if new_turn.role is not Role.USER:
            raise InvalidTurnError(role=new_turn.role.value)

        return ContextBundle(
            prior_turns=tuple(self._prior_turns(conversation_id)),
            new_turn=new_turn,
            profile_fields=dict(profile_fields),
            document_context=document_context or "",
        )

    def _prior_turns(self, conversation_id: str) -> list[ConversationTurn]:
        if self.history_window == 0:
            return []
        try:
            recent = self.store.recent_turns(conversation_id, self.history_window)
        except Exception as exc:
            # Missing history degrades the answer, it does not block it.
            logger.error("Failed to load recent turns", conversation_id=conversation_id, error=str(exc))
            return []

        # Store returns most recent first.
        return list(reversed(recent[: self.history_window]))

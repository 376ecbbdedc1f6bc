from __future__ import annotations

from dataclasses import dataclass, field

from ventureai.conversation import ConversationTurn, InMemoryConversationStore, Role


@dataclass(slots=True)
class FlakyConversationStore:
    """In-memory store that can be told to fail reads and/or writes."""

    fail_reads: bool = False
    fail_writes: bool = False
    inner: InMemoryConversationStore = field(default_factory=InMemoryConversationStore)
    write_attempts: int = 0

    def append_turn(self, conversation_id: str, role: Role, content: str) -> ConversationTurn:
        self.write_attempts += 1
        if self.fail_writes:
            raise ConnectionError("store unavailable")
        return self.inner.append_turn(conversation_id, role, content)

    def recent_turns(self, conversation_id: str, limit: int) -> list[ConversationTurn]:
        if self.fail_reads:
            raise ConnectionError("store unavailable")
        return self.inner.recent_turns(conversation_id, limit)

    def history(self, conversation_id: str) -> list[ConversationTurn]:
        return self.inner.history(conversation_id)

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ventureai.kernel.time import utc_now


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """One persisted chat message. Turns are append-only."""

    role: Role
    content: str
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def user(cls, content: str) -> "ConversationTurn":
        return cls(role=Role.USER, content=content)

    def to_message(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class ContextBundle:
    """Everything submitted to generation for one request.

    `prior_turns` are chronological and immediately precede `new_turn`.
    """

    prior_turns: tuple[ConversationTurn, ...]
    new_turn: ConversationTurn
    profile_fields: dict[str, str]
    document_context: str

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return (*self.prior_turns, self.new_turn)

    def to_messages(self) -> list[dict[str, Any]]:
        return [turn.to_message() for turn in self.turns]

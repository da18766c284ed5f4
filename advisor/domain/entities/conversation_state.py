from __future__ import annotations

from dataclasses import dataclass
from typing import Any


ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatTurn:
    role: str  # "system", "user", "assistant"
    content: str

    def to_message(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class ConversationLog:
    """
    Full chat history sent with every completion request.

    Starts with exactly one system turn. Append-only: user and assistant turns
    are added, nothing is edited or removed.
    """

    def __init__(self, system_instruction: str) -> None:
        self._turns: list[ChatTurn] = [ChatTurn(role=ROLE_SYSTEM, content=system_instruction)]

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return tuple(self._turns)

    def append_user(self, content: str) -> ChatTurn:
        return self._append(ROLE_USER, content)

    def append_assistant(self, content: str) -> ChatTurn:
        return self._append(ROLE_ASSISTANT, content)

    def to_messages(self) -> list[dict[str, Any]]:
        return [turn.to_message() for turn in self._turns]

    def _append(self, role: str, content: str) -> ChatTurn:
        turn = ChatTurn(role=role, content=content)
        self._turns.append(turn)
        return turn

from __future__ import annotations

from dataclasses import dataclass

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
CHAT_ROLES = frozenset({ROLE_SYSTEM, ROLE_USER, ROLE_ASSISTANT})


@dataclass(frozen=True)
class ChatTurn:
    role: str
    content: str

    def __post_init__(self) -> None:
        if self.role not in CHAT_ROLES:
            raise ValueError(f"Unsupported chat role: {self.role}")

    def to_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}

from __future__ import annotations

import asyncio
import logging
import time

from mhi_chatbot.app.memory.contracts import (
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    ROLE_USER,
    ChatTurn,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 21


class ConversationStore:
    """In-memory conversation histories keyed by conversation id.

    Every conversation starts with the shared system turn. Once a conversation
    grows past ``max_turns`` the two turns right after the system turn are
    dropped, whatever their roles. Callers that mutate a conversation across an
    await should hold ``lock(conversation_id)`` for the whole sequence.
    """

    def __init__(self, system_prompt: str, max_turns: int = DEFAULT_MAX_TURNS) -> None:
        if max_turns < 3:
            raise ValueError("max_turns must leave room for the system turn and a pair")
        self._system_turn = ChatTurn(role=ROLE_SYSTEM, content=system_prompt)
        self._max_turns = max_turns
        self._conversations: dict[str, list[ChatTurn]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._last_issued_ms = 0

    @property
    def max_turns(self) -> int:
        return self._max_turns

    def __len__(self) -> int:
        return len(self._conversations)

    def has(self, conversation_id: str) -> bool:
        return conversation_id in self._conversations

    def new_conversation_id(self) -> str:
        now_ms = int(time.time() * 1000)
        issued = max(now_ms, self._last_issued_ms + 1)
        self._last_issued_ms = issued
        return f"conv_{issued}"

    def lock(self, conversation_id: str) -> asyncio.Lock:
        return self._locks.setdefault(conversation_id, asyncio.Lock())

    def get_or_create(self, conversation_id: str) -> list[ChatTurn]:
        turns = self._conversations.get(conversation_id)
        if turns is None:
            turns = [self._system_turn]
            self._conversations[conversation_id] = turns
        return turns

    def append_user(self, conversation_id: str, text: str) -> None:
        self.get_or_create(conversation_id).append(
            ChatTurn(role=ROLE_USER, content=text)
        )

    def append_assistant(self, conversation_id: str, text: str) -> None:
        self.get_or_create(conversation_id).append(
            ChatTurn(role=ROLE_ASSISTANT, content=text)
        )

    def trim(self, conversation_id: str) -> bool:
        turns = self._conversations.get(conversation_id)
        if turns is None or len(turns) <= self._max_turns:
            return False
        del turns[1:3]
        LOGGER.debug(
            "Trimmed conversation %s to %s turns", conversation_id, len(turns)
        )
        return True

    def turns(self, conversation_id: str) -> tuple[ChatTurn, ...]:
        return tuple(self._conversations.get(conversation_id, ()))

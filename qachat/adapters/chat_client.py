"""Shared chat session interfaces for free-text conversation."""

from __future__ import annotations

from typing import Protocol


class ChatSessionClient(Protocol):
    def send(self, turn_text: str) -> str:
        """Send one user turn and return the reply text (or a readable error)."""


class UnavailableChatClient:
    """Stand-in session used when the AI backend could not be initialized."""

    def __init__(self, reason: str) -> None:
        self._reason = reason

    def send(self, turn_text: str) -> str:
        return self._reason

"""Chat data contracts.

Transcript messages are immutable; the transcript itself only grows.
Resolver output never carries transcript state.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChatMode(str, Enum):
    GEMINI = "gemini"
    QA = "qa"


class Origin(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Attachment(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    display_name: str = Field(min_length=1)
    resource_url: str = Field(min_length=1)


class ResolvedAnswer(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    answer_text: str = ""
    attachments: list[Attachment] = Field(default_factory=list)


class DisplayMessage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str
    origin: Origin
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_user(self) -> bool:
        return self.origin == Origin.USER

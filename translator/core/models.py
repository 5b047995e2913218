from __future__ import annotations

import time
from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


PLACEHOLDER_TITLE = "New Translation"


def now_ms() -> int:
    return int(time.time() * 1000)


class _Record(BaseModel):
    # camelCase on the wire, immutable in memory, unknown keys ignored
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Message(_Record):
    """A single chat bubble."""

    id: str = Field(..., description="Unique within its thread")
    role: Literal["user", "assistant"] = Field(..., description="'user' or 'assistant'")
    text: str = Field("", description="Source text, translation or error string")
    lang_label: str = Field("", description="Language name shown above the bubble")
    lang_code: str = Field("", description="Locale used when speaking the message")


class ConversationThread(_Record):
    """A named conversation, persisted as one unit."""

    id: str
    title: str = PLACEHOLDER_TITLE
    messages: Tuple[Message, ...] = ()
    created_at: int = Field(default_factory=now_ms, description="Epoch milliseconds")

    @field_validator("title", mode="before")
    @classmethod
    def _title_never_empty(cls, value):
        if value is None or not str(value).strip():
            return PLACEHOLDER_TITLE
        return value

    def with_message(self, message: Message, title: str) -> "ConversationThread":
        return self.model_copy(
            update={"messages": self.messages + (message,), "title": title}
        )

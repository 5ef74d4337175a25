"""Chat DTOs."""
from __future__ import annotations

from pydantic import Field

from drinkchain.domain.models import ChatMessage, WireModel


class ChatMessageRequest(WireModel):
    text: str = Field(min_length=1)


class ChatTranscript(WireModel):
    session_id: str
    messages: list[ChatMessage]
    awaiting: bool = False

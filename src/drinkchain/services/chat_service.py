"""Chat sessions keyed by session id."""
from __future__ import annotations

import threading

from drinkchain.chat.session import ChatSession
from drinkchain.domain.exceptions import ConflictError
from drinkchain.domain.models import ChatMessage
from drinkchain.synthesis.client import SynthesisClient


class ChatService:
    def __init__(self, client: SynthesisClient) -> None:
        self._client = client
        self._sessions: dict[str, ChatSession] = {}
        self._lock = threading.Lock()

    def session(self, session_id: str) -> ChatSession:
        with self._lock:
            if session_id not in self._sessions:
                self._sessions[session_id] = ChatSession(self._client)
            return self._sessions[session_id]

    def transcript(self, session_id: str) -> list[ChatMessage]:
        return self.session(session_id).transcript

    def send(self, session_id: str, text: str) -> ChatMessage:
        if not text or not text.strip():
            raise ValueError("message must not be empty")
        reply = self.session(session_id).send(text)
        if reply is None:
            raise ConflictError(f"Session {session_id} is still waiting for a reply")
        return reply

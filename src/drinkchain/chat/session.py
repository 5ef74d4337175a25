"""Advisor chat: an append-only transcript with one turn in flight at a time."""
from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from drinkchain.domain.models import ChatMessage
from drinkchain.synthesis.client import SynthesisClient

logger = logging.getLogger(__name__)

GREETING = "你好！我是您的供应链AI参谋。想了解最近什么原料最火，或者哪里能买到优质茶叶吗？"
APOLOGY = "抱歉，暂时无法连接到分析服务器。请稍后再试。"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatSession:
    """Serializes turns: while ``awaiting`` is set, ``send`` is a no-op.

    Because turns never overlap, replies are appended in request order.
    """

    def __init__(
        self,
        client: SynthesisClient,
        *,
        greeting: str | None = GREETING,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._client = client
        self._clock = clock
        self._guard = threading.Lock()
        self._awaiting = False
        self._transcript: list[ChatMessage] = []
        if greeting:
            self._transcript.append(self._message("model", greeting))

    @property
    def awaiting(self) -> bool:
        return self._awaiting

    @property
    def transcript(self) -> list[ChatMessage]:
        return list(self._transcript)

    def send(self, text: str) -> ChatMessage | None:
        """Run one turn and return the model's message.

        Returns ``None`` without touching the transcript when *text* is blank
        or another turn is still awaiting its reply.
        """
        if not text or not text.strip():
            return None
        with self._guard:
            if self._awaiting:
                logger.debug("Chat turn rejected: previous turn still in flight")
                return None
            self._awaiting = True

        try:
            prior = list(self._transcript)
            self._transcript.append(self._message("user", text))
            reply = self._client.converse(prior, text)
            if reply.ok:
                answer = self._message("model", reply.payload)
            else:
                logger.error("Chat turn failed (%s): %s", reply.status.value, reply.error)
                answer = self._message("model", APOLOGY)
            self._transcript.append(answer)
            return answer
        finally:
            self._awaiting = False

    def _message(self, role: str, text: str) -> ChatMessage:
        return ChatMessage(id=uuid.uuid4().hex, role=role, text=text, timestamp=self._clock())

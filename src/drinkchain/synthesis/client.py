"""Boundary adapter to the generative backend.

One method per request kind. Each makes exactly one backend call and decodes
exactly one payload; nothing is raised past the caller. Failures come back as
a ``SynthesisReply`` with status ``UNREACHABLE`` or ``UNPARSEABLE``.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel

from drinkchain.config import settings
from drinkchain.domain.models import ChatMessage
from drinkchain.synthesis import prompts
from drinkchain.synthesis.contract import supply_response_format, trend_response_format
from drinkchain.synthesis.llm_protocol import LLMClient, OpenAILLMClient

logger = logging.getLogger(__name__)

_ROLE_MAP = {"user": "user", "model": "assistant"}


class ReplyStatus(str, Enum):
    OK = "OK"
    UNREACHABLE = "UNREACHABLE"
    UNPARSEABLE = "UNPARSEABLE"


class SynthesisReply(BaseModel):
    status: ReplyStatus
    payload: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ReplyStatus.OK


class SynthesisClient:
    def __init__(self, llm_client: LLMClient | None = None, *, model: str | None = None) -> None:
        self._llm = llm_client or OpenAILLMClient()
        self._model = model or settings.OPENAI_MODEL_SYNTHESIS

    # ------------------------------------------------------------------
    # Request kinds
    # ------------------------------------------------------------------

    def synthesize_trends(self, directive: str) -> SynthesisReply:
        messages = [
            {"role": "system", "content": prompts.TRENDS_SYSTEM},
            {"role": "user", "content": prompts.TRENDS_TASK.format(directive=directive)},
        ]
        return self._call_json("trends", messages, trend_response_format())

    def synthesize_supply(self, category: str, directive: str) -> SynthesisReply:
        messages = [
            {"role": "system", "content": prompts.SUPPLY_SYSTEM},
            {
                "role": "user",
                "content": prompts.SUPPLY_TASK.format(category=category or "general", directive=directive),
            },
        ]
        return self._call_json("supply", messages, supply_response_format())

    def converse(self, transcript: Sequence[ChatMessage], new_message: str) -> SynthesisReply:
        messages = [{"role": "system", "content": prompts.CHAT_SYSTEM}]
        messages.extend(serialize_transcript(transcript))
        messages.append({"role": "user", "content": new_message})

        raw = self._call("chat", messages, None)
        if isinstance(raw, SynthesisReply):
            return raw
        text = (raw or "").strip()
        if not text:
            logger.error("Chat reply was empty")
            return SynthesisReply(status=ReplyStatus.UNPARSEABLE, error="empty reply")
        return SynthesisReply(status=ReplyStatus.OK, payload=text)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _call(
        self, kind: str, messages: list[dict[str, Any]], response_format: dict[str, Any] | None,
    ) -> str | None | SynthesisReply:
        try:
            return self._llm.chat_completions_create(
                model=self._model,
                messages=messages,
                response_format=response_format,
            )
        except Exception as exc:
            logger.error("Synthesis backend unreachable for %s request: %s", kind, exc)
            return SynthesisReply(status=ReplyStatus.UNREACHABLE, error=str(exc))

    def _call_json(
        self, kind: str, messages: list[dict[str, Any]], response_format: dict[str, Any],
    ) -> SynthesisReply:
        raw = self._call(kind, messages, response_format)
        if isinstance(raw, SynthesisReply):
            return raw
        try:
            payload = json.loads(_strip_code_fence(raw or ""))
        except ValueError as exc:
            logger.error("Synthesis %s payload is not JSON: %s", kind, exc)
            return SynthesisReply(status=ReplyStatus.UNPARSEABLE, error=str(exc))
        return SynthesisReply(status=ReplyStatus.OK, payload=payload)


def serialize_transcript(transcript: Sequence[ChatMessage]) -> list[dict[str, str]]:
    """Role-tagged turns in transcript order (``model`` → ``assistant``)."""
    return [{"role": _ROLE_MAP[m.role], "content": m.text} for m in transcript]


def _strip_code_fence(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()

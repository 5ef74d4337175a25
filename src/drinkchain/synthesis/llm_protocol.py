"""Minimal LLMClient protocol for the synthesis boundary.

Covers what the three request kinds need: one chat completion returning its
content string, optionally constrained by a structured-output format.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from drinkchain.config import settings
from drinkchain.domain.exceptions import UnreachableError


@runtime_checkable
class LLMClient(Protocol):
    """Protocol for chat completion calls returning a content string."""

    def chat_completions_create(
        self,
        *,
        model: str,
        messages: list[dict[str, Any]],
        response_format: dict[str, Any] | None = None,
    ) -> str:
        """Return the content string from the first choice."""
        ...


class OpenAILLMClient:
    """Adapter wrapping the OpenAI SDK client."""

    def __init__(self, openai_client: Any | None = None) -> None:
        self._client = openai_client

    def _sdk(self) -> Any:
        # Built on first use so a missing key surfaces as a failed call, not a startup crash.
        if self._client is None:
            from openai import OpenAI  # lazy import

            api_key = settings.OPENAI_API_KEY.get_secret_value() if settings.OPENAI_API_KEY else None
            # Retries stay off: one backend call per synthesis request.
            self._client = OpenAI(api_key=api_key, timeout=settings.OPENAI_TIMEOUT, max_retries=0)
        return self._client

    def chat_completions_create(
        self,
        *,
        model: str,
        messages: list[dict[str, Any]],
        response_format: dict[str, Any] | None = None,
    ) -> str:
        """Delegate to the OpenAI SDK and return the content string.

        SDK failures (connection, timeout, API status) raise ``UnreachableError``.
        """
        from openai import OpenAIError

        kwargs: dict[str, Any] = {
            "model": model,
            "messages": messages,
        }
        if response_format is not None:
            kwargs["response_format"] = response_format
        try:
            response = self._sdk().chat.completions.create(**kwargs)
        except OpenAIError as exc:
            raise UnreachableError(f"OpenAI request failed: {exc}") from exc
        return response.choices[0].message.content

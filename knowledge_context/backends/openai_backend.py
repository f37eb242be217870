"""OpenAI and OpenAI-compatible (LM Studio, vLLM) chat backend."""

from __future__ import annotations

import logging
from typing import Any

import openai

from knowledge_context.backends.base import Backend, BackendRegistry

logger = logging.getLogger(__name__)


@BackendRegistry.register("openai")
class OpenAIBackend(Backend):
    """Backend powered by the OpenAI Chat Completions API.

    Parameters
    ----------
    model : str
        Default model identifier.
    api_key : str | None
        API key. Falls back to the ``OPENAI_API_KEY`` env var.
    base_url : str | None
        Custom base URL for a compatible local server
        (e.g. ``"http://localhost:1234/v1"``).
    max_tokens : int
        Default max tokens for completions.
    """

    name = "openai"

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        base_url: str | None = None,
        max_tokens: int = 1024,
    ) -> None:
        self._model = model
        self._max_tokens = max_tokens
        kwargs: dict[str, Any] = {}
        if api_key:
            kwargs["api_key"] = api_key
        if base_url:
            kwargs["base_url"] = base_url
        self._client = openai.OpenAI(**kwargs)

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 1024,
    ) -> str:
        used_model = model or self._model
        logger.debug("OpenAI request model=%s messages=%d", used_model, len(messages))
        response = self._client.chat.completions.create(
            model=used_model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens or self._max_tokens,
        )
        return response.choices[0].message.content or ""

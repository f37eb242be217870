"""LiteLLM backend for Gemini, Ollama and other providers."""

from __future__ import annotations

import logging
from typing import Any

import litellm

from knowledge_context.backends.base import Backend, BackendRegistry

logger = logging.getLogger(__name__)


@BackendRegistry.register("litellm")
class LiteLLMBackend(Backend):
    """Backend powered by LiteLLM's unified completion interface.

    Provider selection follows LiteLLM model prefixes, e.g.
    ``"gemini/gemini-1.5-flash"`` or ``"ollama/llama3"`` for a local runner.

    Parameters
    ----------
    model : str
        Model identifier in LiteLLM format.
    api_base : str | None
        Endpoint override (e.g. ``"http://localhost:11434"`` for Ollama).
    max_tokens : int
        Default max tokens for completions.
    """

    name = "litellm"

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_base: str | None = None,
        max_tokens: int = 1024,
    ) -> None:
        self._model = model
        self._api_base = api_base
        self._max_tokens = max_tokens

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 1024,
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": model or self._model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens or self._max_tokens,
        }
        if self._api_base:
            kwargs["api_base"] = self._api_base

        logger.debug("LiteLLM request model=%s messages=%d", kwargs["model"], len(messages))
        response = litellm.completion(**kwargs)
        return response.choices[0].message.content or ""

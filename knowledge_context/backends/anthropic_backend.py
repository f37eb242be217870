"""Anthropic Messages API chat backend."""

from __future__ import annotations

import logging
from typing import Any

import anthropic

from knowledge_context.backends.base import Backend, BackendRegistry

logger = logging.getLogger(__name__)


@BackendRegistry.register("anthropic")
class AnthropicBackend(Backend):
    """Backend powered by the Anthropic Messages API.

    System messages are folded into the top-level ``system`` parameter,
    which is where the Messages API expects them.

    Parameters
    ----------
    model : str
        Default model identifier.
    api_key : str | None
        API key. Falls back to the ``ANTHROPIC_API_KEY`` env var.
    max_tokens : int
        Default max tokens for completions.
    """

    name = "anthropic"

    def __init__(
        self,
        model: str = "claude-sonnet-4-5-20250929",
        api_key: str | None = None,
        max_tokens: int = 1024,
    ) -> None:
        self._model = model
        self._max_tokens = max_tokens
        self._client = anthropic.Anthropic(api_key=api_key) if api_key else anthropic.Anthropic()

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 1024,
    ) -> str:
        system_parts = [m["content"] for m in messages if m["role"] == "system"]
        turns = [m for m in messages if m["role"] != "system"]

        kwargs: dict[str, Any] = {
            "model": model or self._model,
            "max_tokens": max_tokens or self._max_tokens,
            "temperature": temperature,
            "messages": turns,
        }
        if system_parts:
            kwargs["system"] = "\n\n".join(system_parts)

        logger.debug("Anthropic request model=%s turns=%d", kwargs["model"], len(turns))
        response = self._client.messages.create(**kwargs)
        return "".join(block.text for block in response.content if getattr(block, "type", "") == "text")

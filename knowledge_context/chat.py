"""ChatAssistant: answers one question with knowledge-base grounding."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from knowledge_context.backends import BackendRegistry
from knowledge_context.backends.base import Backend
from knowledge_context.config import KnowledgeConfig, load_config
from knowledge_context.models import ChatAnswer, PromptSpec
from knowledge_context.prompts.renderer import load_prompt_spec, render
from knowledge_context.retrieval.retriever import KnowledgeRetriever
from knowledge_context.store.base import StorageError
from knowledge_context.store.factory import build_store, initialize_store

logger = logging.getLogger(__name__)

DEFAULT_COMPANY_NAME = "Tallman Equipment Company"


class ChatAssistant:
    """Retrieve context, render the chat prompt, and call a backend.

    Parameters
    ----------
    backend : Backend
        LLM backend for completions.
    retriever : KnowledgeRetriever
        Source of grounding snippets.
    prompt : PromptSpec | None
        Chat prompt template; ``None`` loads the packaged template.
    default_model : str | None
        Default model override for the backend.
    default_temperature : float
        Default temperature for completions.
    default_max_tokens : int
        Default max tokens for completions.
    company_name : str
        Substituted into the system prompt.
    """

    def __init__(
        self,
        backend: Backend,
        retriever: KnowledgeRetriever,
        *,
        prompt: PromptSpec | None = None,
        default_model: str | None = None,
        default_temperature: float = 0.2,
        default_max_tokens: int = 1024,
        company_name: str = DEFAULT_COMPANY_NAME,
    ) -> None:
        self._backend = backend
        self._retriever = retriever
        self._prompt = prompt or load_prompt_spec()
        self._default_model = default_model
        self._default_temperature = default_temperature
        self._default_max_tokens = default_max_tokens
        self._company_name = company_name

    @classmethod
    def from_config(cls, config: KnowledgeConfig | dict | str | None = None) -> ChatAssistant:
        """Construct a ChatAssistant from a config object or raw source.

        Builds the configured store and seeds it if empty and seeding is
        enabled.

        Parameters
        ----------
        config : KnowledgeConfig | dict | str | None
            A ``KnowledgeConfig``, a dict, a YAML file path, or ``None``
            for defaults.

        Returns
        -------
        ChatAssistant
        """
        if not isinstance(config, KnowledgeConfig):
            config = load_config(config)

        store = build_store(config)
        if config.store.seed_defaults:
            initialize_store(store)

        backend = BackendRegistry.create(
            config.backend.type,
            model=config.backend.model,
            **config.backend.extra,
        )

        return cls(
            backend=backend,
            retriever=KnowledgeRetriever(store, config.retrieval.policy),
            prompt=load_prompt_spec(config.prompt),
            default_model=config.backend.model,
            default_temperature=config.backend.temperature,
            default_max_tokens=config.backend.max_tokens,
        )

    @property
    def retriever(self) -> KnowledgeRetriever:
        return self._retriever

    def gather_context(self, question: str) -> list[str]:
        """Return grounding snippets, or none if the store is unavailable."""
        try:
            return self._retriever.retrieve_context(question)
        except StorageError as exc:
            logger.warning("Knowledge base unavailable, answering without context: %s", exc)
            return []

    def answer(
        self,
        question: str,
        history: list[dict[str, str]] | None = None,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> ChatAnswer:
        """Answer *question*, grounded in the knowledge base.

        Parameters
        ----------
        question : str
            The user's message.
        history : list[dict[str, str]] | None
            Earlier ``role`` / ``content`` turns of the conversation.
        model : str | None
            Model override for this call.
        temperature : float | None
            Temperature override for this call.
        max_tokens : int | None
            Max tokens override for this call.

        Returns
        -------
        ChatAnswer
        """
        context = self.gather_context(question)
        variables: dict[str, Any] = {
            "question": question,
            "context": context,
            "company_name": self._company_name,
        }
        messages = render(self._prompt, variables, history)

        used_model = model or self._default_model or ""
        text = self._backend.complete(
            messages,
            model=model or self._default_model,
            temperature=temperature if temperature is not None else self._default_temperature,
            max_tokens=max_tokens or self._default_max_tokens,
        )

        result = ChatAnswer(
            question=question,
            answer=text,
            context=context,
            backend_name=self._backend.name,
            model=used_model,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        logger.info(
            "Answered question backend=%s model=%s context_items=%d",
            result.backend_name,
            result.model,
            len(context),
        )
        return result

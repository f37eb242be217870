"""Package-level entry points for ingestion, retrieval and chat."""

from __future__ import annotations

import logging
from pathlib import Path

from knowledge_context.chat import ChatAssistant
from knowledge_context.config import KnowledgeConfig, load_config
from knowledge_context.models import ChatAnswer, KnowledgeItem
from knowledge_context.retrieval.retriever import KnowledgeRetriever
from knowledge_context.store.base import KnowledgeStore
from knowledge_context.store.defaults import load_default_knowledge
from knowledge_context.store.factory import build_store

logger = logging.getLogger(__name__)


def add_knowledge(store: KnowledgeStore, content: str) -> KnowledgeItem | None:
    """Store *content* as a new item stamped with the current time.

    Blank content is ignored.

    Parameters
    ----------
    store : KnowledgeStore
        Target store.
    content : str
        Snippet text; surrounding whitespace is stripped.

    Returns
    -------
    KnowledgeItem | None
        The stored item, or ``None`` if *content* was blank.
    """
    content = content.strip()
    if not content:
        return None
    item = KnowledgeItem.create(content)
    store.add_item(item)
    logger.debug("Added knowledge item ts=%d (%d chars)", item.timestamp, len(content))
    return item


def reload_defaults(store: KnowledgeStore, defaults_path: str | Path | None = None) -> int:
    """Clear *store* and reseed it from the default catalog.

    Returns
    -------
    int
        Item count after the reload.
    """
    return store.reset_to_defaults(load_default_knowledge(defaults_path))


def retrieve_context(
    query: str,
    config: KnowledgeConfig | dict | str | Path | None = None,
    *,
    store: KnowledgeStore | None = None,
) -> list[str]:
    """Return the ranked knowledge snippets for *query*.

    Parameters
    ----------
    query : str
        Free-text user query.
    config : KnowledgeConfig | dict | str | Path | None
        Configuration source; selects the store and scoring policy.
    store : KnowledgeStore | None
        Use this store instead of building one from *config*.

    Returns
    -------
    list[str]
    """
    if not isinstance(config, KnowledgeConfig):
        config = load_config(config)
    if store is None:
        store = build_store(config)
    return KnowledgeRetriever(store, config.retrieval.policy).retrieve_context(query)


def answer_question(
    question: str,
    config: KnowledgeConfig | dict | str | Path | None = None,
    history: list[dict[str, str]] | None = None,
) -> ChatAnswer:
    """Answer a single question with a freshly configured assistant.

    Parameters
    ----------
    question : str
        The user's message.
    config : KnowledgeConfig | dict | str | Path | None
        Configuration source for the store, policy, prompt and backend.
    history : list[dict[str, str]] | None
        Earlier conversation turns.

    Returns
    -------
    ChatAnswer
    """
    return ChatAssistant.from_config(config).answer(question, history)


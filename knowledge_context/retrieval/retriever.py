"""Bind a knowledge store to the relevance scorer."""

from __future__ import annotations

from knowledge_context.retrieval.policy import ScoringPolicy, load_policy
from knowledge_context.retrieval.scorer import retrieve_context
from knowledge_context.store.base import KnowledgeStore


class KnowledgeRetriever:
    """Answer context queries against the current contents of a store.

    Each call reads a fresh snapshot of the corpus, so items added between
    calls are visible immediately.

    Parameters
    ----------
    store : KnowledgeStore
        Corpus source.
    policy : ScoringPolicy | dict | str | None
        Scoring policy, overrides, or policy file; ``None`` uses the
        packaged default.
    """

    def __init__(self, store: KnowledgeStore, policy: ScoringPolicy | dict | str | None = None) -> None:
        self._store = store
        self._policy = load_policy(policy)

    @property
    def store(self) -> KnowledgeStore:
        return self._store

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    def retrieve_context(self, query: str) -> list[str]:
        """Return ranked snippets for *query*.

        Raises
        ------
        StorageError
            If the store cannot be read.
        """
        if not query.strip():
            return []
        return retrieve_context(query, self._store.get_all_items(), self._policy)

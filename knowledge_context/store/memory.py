"""In-memory knowledge store."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from knowledge_context.models import KnowledgeItem
from knowledge_context.store.base import KnowledgeStore, StoreRegistry


@StoreRegistry.register("memory")
class MemoryKnowledgeStore(KnowledgeStore):
    """Process-lifetime store backed by a list.

    Parameters
    ----------
    items : Iterable[KnowledgeItem] | None
        Initial corpus.
    """

    name = "memory"

    def __init__(self, items: Iterable[KnowledgeItem] | None = None, **kwargs) -> None:
        self._items: list[KnowledgeItem] = list(items or [])
        self._lock = threading.Lock()

    def add_item(self, item: KnowledgeItem) -> None:
        with self._lock:
            self._items.append(item)

    def bulk_add_items(self, items: Iterable[KnowledgeItem]) -> None:
        batch = list(items)
        with self._lock:
            self._items.extend(batch)

    def get_all_items(self) -> list[KnowledgeItem]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def count(self) -> int:
        with self._lock:
            return len(self._items)

"""Abstract knowledge store protocol and registry."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from knowledge_context.models import KnowledgeItem

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the backing medium of a store cannot be read or written."""


class KnowledgeStore(ABC):
    """Durable (or process-lifetime) storage of the knowledge corpus.

    Subclasses must set ``name`` and implement the five primitive
    operations. Seeding and reloading are built on top of them.
    """

    name: str = ""

    @abstractmethod
    def add_item(self, item: KnowledgeItem) -> None:
        """Append one item. Duplicate content is allowed."""

    @abstractmethod
    def bulk_add_items(self, items: Iterable[KnowledgeItem]) -> None:
        """Append many items as a single logical batch."""

    @abstractmethod
    def get_all_items(self) -> list[KnowledgeItem]:
        """Return a snapshot of the full corpus, order unspecified."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every item."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored items."""

    def seed_if_empty(self, defaults: Iterable[KnowledgeItem]) -> int:
        """Populate an empty store from *defaults*.

        Parameters
        ----------
        defaults : Iterable[KnowledgeItem]
            The default catalog.

        Returns
        -------
        int
            Number of items added (0 if the store already had content).
        """
        if self.count() > 0:
            return 0
        items = list(defaults)
        logger.info("Knowledge base is empty, seeding %d default items", len(items))
        self.bulk_add_items(items)
        return len(items)

    def reset_to_defaults(self, defaults: Iterable[KnowledgeItem]) -> int:
        """Clear the store and reload it from *defaults*.

        Returns
        -------
        int
            Item count after the reload.
        """
        self.clear()
        self.bulk_add_items(defaults)
        total = self.count()
        logger.info("Knowledge base reloaded with %d items", total)
        return total


class StoreRegistry:
    """Discover and instantiate registered knowledge stores."""

    _stores: dict[str, type[KnowledgeStore]] = {}

    @classmethod
    def register(cls, name: str):
        """Class decorator that registers a store under *name*.

        Parameters
        ----------
        name : str
            Lookup key used in configuration files.

        Returns
        -------
        Callable
            The original class, unmodified.
        """

        def decorator(klass: type[KnowledgeStore]) -> type[KnowledgeStore]:
            cls._stores[name] = klass
            return klass

        return decorator

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> KnowledgeStore:
        """Instantiate a registered store.

        Raises
        ------
        KeyError
            If *name* is not registered.
        """
        if name not in cls._stores:
            available = ", ".join(sorted(cls._stores)) or "(none)"
            msg = f"Unknown store {name!r}. Available: {available}"
            raise KeyError(msg)
        return cls._stores[name](**kwargs)

    @classmethod
    def available(cls) -> list[str]:
        """Return sorted list of registered store names."""
        return sorted(cls._stores)

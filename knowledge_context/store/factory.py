"""Construct and initialize the configured knowledge store."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from knowledge_context.config import KnowledgeConfig, StoreConfig, load_config
from knowledge_context.models import KnowledgeItem
from knowledge_context.store.base import KnowledgeStore, StoreRegistry
from knowledge_context.store.defaults import load_default_knowledge

logger = logging.getLogger(__name__)


def build_store(config: KnowledgeConfig | StoreConfig | dict | str | None = None) -> KnowledgeStore:
    """Instantiate the store named in *config* without touching its contents.

    Parameters
    ----------
    config : KnowledgeConfig | StoreConfig | dict | str | None
        Full config, store section, raw dict, YAML path, or ``None``.

    Returns
    -------
    KnowledgeStore
    """
    if isinstance(config, StoreConfig):
        store_config = config
    else:
        if not isinstance(config, KnowledgeConfig):
            config = load_config(config)
        store_config = config.store
    store = StoreRegistry.create(store_config.type, path=store_config.path)
    logger.debug("Created %s knowledge store", store.name)
    return store


def initialize_store(store: KnowledgeStore, defaults: Iterable[KnowledgeItem] | None = None) -> int:
    """Seed *store* from the default catalog if it is empty.

    Call once at process startup.

    Parameters
    ----------
    store : KnowledgeStore
        The store to initialize.
    defaults : Iterable[KnowledgeItem] | None
        Seed items; ``None`` loads the packaged catalog.

    Returns
    -------
    int
        Number of items seeded.
    """
    if store.count() > 0:
        return 0
    items = list(defaults) if defaults is not None else load_default_knowledge()
    return store.seed_if_empty(items)

"""Packaged default knowledge catalog."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from knowledge_context.models import KnowledgeItem

logger = logging.getLogger(__name__)

DEFAULT_KNOWLEDGE_PATH = Path(__file__).resolve().parent.parent / "data" / "default_knowledge.yaml"


def load_default_knowledge(path: str | Path | None = None) -> list[KnowledgeItem]:
    """Load the seed catalog from a YAML file.

    Parameters
    ----------
    path : str | Path | None
        YAML file with a top-level ``items`` list. Defaults to the
        packaged catalog.

    Returns
    -------
    list[KnowledgeItem]

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If an entry is malformed.
    """
    path = Path(path) if path is not None else DEFAULT_KNOWLEDGE_PATH
    if not path.exists():
        msg = f"Default knowledge file not found: {path}"
        raise FileNotFoundError(msg)

    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    entries = data.get("items", []) if isinstance(data, dict) else data
    items = [KnowledgeItem.from_dict(entry) for entry in entries or []]
    logger.debug("Loaded %d default knowledge items from %s", len(items), path)
    return items

"""Unified configuration for the knowledge base and chat assistant."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

_BACKEND_KEYS = {"type", "model", "temperature", "max_tokens"}


@dataclass
class StoreConfig:
    """Knowledge store configuration.

    Parameters
    ----------
    type : str
        Registered store name (``"json"`` or ``"memory"``).
    path : str
        File path used by file-backed stores.
    seed_defaults : bool
        Seed an empty store from the packaged default catalog at startup.
    """

    type: str = "json"
    path: str = "knowledge.json"
    seed_defaults: bool = True

    def __post_init__(self) -> None:
        if not self.type:
            msg = "store type must be a non-empty string"
            raise ValueError(msg)


@dataclass
class BackendConfig:
    """LLM backend configuration.

    Parameters
    ----------
    type : str
        Registered backend name (``"litellm"``, ``"openai"``, ``"anthropic"``).
    model : str
        Model identifier passed to the backend.
    temperature : float
        Sampling temperature.
    max_tokens : int
        Maximum tokens per completion.
    extra : dict
        Additional kwargs forwarded to the backend constructor.
    """

    type: str = "litellm"
    model: str = "gpt-4o-mini"
    temperature: float = 0.2
    max_tokens: int = 1024
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.model:
            msg = "model must be a non-empty string"
            raise ValueError(msg)
        if self.temperature < 0:
            msg = f"temperature must be >= 0, got {self.temperature}"
            raise ValueError(msg)
        if self.max_tokens <= 0:
            msg = f"max_tokens must be > 0, got {self.max_tokens}"
            raise ValueError(msg)


@dataclass
class RetrievalConfig:
    """Scoring policy selection.

    Parameters
    ----------
    policy : str | dict | None
        Path to a scoring-policy YAML file, an inline dict of overrides,
        or ``None`` for the packaged default policy.
    """

    policy: str | dict | None = None


@dataclass
class KnowledgeConfig:
    """Top-level configuration.

    Parameters
    ----------
    store : StoreConfig
        Knowledge store settings.
    retrieval : RetrievalConfig
        Scoring policy settings.
    backend : BackendConfig
        LLM backend settings.
    prompt : str | None
        Path to a prompt template YAML file; ``None`` uses the packaged
        chat template.
    """

    store: StoreConfig = field(default_factory=StoreConfig)
    retrieval: RetrievalConfig = field(default_factory=RetrievalConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    prompt: str | None = None


def load_config(source: str | Path | dict[str, Any] | None = None) -> KnowledgeConfig:
    """Load a KnowledgeConfig from a YAML file, dict, or environment variables.

    Parameters
    ----------
    source : str | Path | dict | None
        A path to a YAML file, a raw dict, or ``None`` to use only
        environment variable overrides on defaults.

    Returns
    -------
    KnowledgeConfig
    """
    raw: dict[str, Any] = {}

    if isinstance(source, dict):
        raw = source
    elif source is not None:
        path = Path(source)
        if path.is_file():
            raw = _load_yaml(path)

    store_raw = raw.get("store") or {}
    store = StoreConfig(
        type=os.environ.get("KNOWLEDGE_STORE_TYPE", store_raw.get("type", "json")),
        path=os.environ.get("KNOWLEDGE_STORE_PATH", str(store_raw.get("path", "knowledge.json"))),
        seed_defaults=_as_bool(store_raw.get("seed_defaults", True)),
    )

    backend_raw = raw.get("backend") or {}
    backend = BackendConfig(
        type=os.environ.get("KNOWLEDGE_BACKEND_TYPE", backend_raw.get("type", "litellm")),
        model=os.environ.get("KNOWLEDGE_BACKEND_MODEL", backend_raw.get("model", "gpt-4o-mini")),
        temperature=float(os.environ.get("KNOWLEDGE_BACKEND_TEMPERATURE", backend_raw.get("temperature", 0.2))),
        max_tokens=int(os.environ.get("KNOWLEDGE_BACKEND_MAX_TOKENS", backend_raw.get("max_tokens", 1024))),
        extra={k: v for k, v in backend_raw.items() if k not in _BACKEND_KEYS},
    )

    retrieval_raw = raw.get("retrieval") or {}
    retrieval = RetrievalConfig(policy=retrieval_raw.get("policy"))

    return KnowledgeConfig(store=store, retrieval=retrieval, backend=backend, prompt=raw.get("prompt"))


def _as_bool(value: Any) -> bool:
    """Interpret quoted flags such as ``"false"`` or ``"no"`` as booleans."""
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"true", "1", "yes", "on"}:
            return True
        if normalized in {"false", "0", "no", "off", ""}:
            return False
        msg = f"expected a boolean flag, got {value!r}"
        raise ValueError(msg)
    return bool(value)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file using PyYAML."""
    with open(path, encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}

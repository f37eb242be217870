"""Tunable scoring policy: signal weights, result limits, synonym and topic tables."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_POLICY_PATH = Path(__file__).resolve().parent.parent / "data" / "scoring_policy.yaml"


@dataclass(frozen=True)
class Weights:
    """Per-signal weights.

    Parameters
    ----------
    exact_word : int
        Added per query word found as a whole word.
    substring : int
        Added per query word found anywhere in the content.
    phrase : int
        Added once when the full multi-word query appears verbatim.
    partial_overlap : int
        Multiplied by the number of loosely matched query words.
    synonym : int
        Added per query word whose synonyms appear in the content.
    """

    exact_word: int = 5
    substring: int = 3
    phrase: int = 8
    partial_overlap: int = 1
    synonym: int = 2

    def __post_init__(self) -> None:
        for name in ("exact_word", "substring", "phrase", "partial_overlap", "synonym"):
            if getattr(self, name) < 0:
                msg = f"weight {name} must be >= 0, got {getattr(self, name)}"
                raise ValueError(msg)


@dataclass(frozen=True)
class Limits:
    """Result-count caps and the query-length thresholds that select them.

    Parameters
    ----------
    short_query_max_words : int
        Queries with at most this many words are "short": zero-score items
        stay candidates and ``short_query_limit`` applies.
    short_query_limit : int
        Maximum results for short queries.
    long_query_limit : int
        Maximum results for longer queries.
    fallback_max_words : int
        Broadened search only runs for queries with at most this many words.
    fallback_limit : int
        Maximum results returned by the broadened search.
    """

    short_query_max_words: int = 2
    short_query_limit: int = 8
    long_query_limit: int = 5
    fallback_max_words: int = 3
    fallback_limit: int = 3

    def __post_init__(self) -> None:
        for name in (
            "short_query_max_words",
            "short_query_limit",
            "long_query_limit",
            "fallback_max_words",
            "fallback_limit",
        ):
            if getattr(self, name) <= 0:
                msg = f"limit {name} must be > 0, got {getattr(self, name)}"
                raise ValueError(msg)


@dataclass(frozen=True)
class Topic:
    """A high-value subject area whose keywords boost matching content.

    Parameters
    ----------
    name : str
        Topic label (e.g. ``"location"``).
    keywords : tuple[str, ...]
        Lowercase keywords. A query mentioning any of them activates the topic.
    boost : int
        Added per topic keyword present in the content.
    """

    name: str
    keywords: tuple[str, ...]
    boost: int

    def __post_init__(self) -> None:
        if not self.name:
            msg = "topic name must be a non-empty string"
            raise ValueError(msg)
        if self.boost < 0:
            msg = f"topic {self.name!r} boost must be >= 0, got {self.boost}"
            raise ValueError(msg)


@dataclass(frozen=True)
class ScoringPolicy:
    """Everything the relevance scorer needs besides the query and corpus.

    Parameters
    ----------
    weights : Weights
        Signal weights.
    limits : Limits
        Result caps and query-length thresholds.
    synonyms : dict[str, tuple[str, ...]]
        Query keyword to synonym list.
    topics : tuple[Topic, ...]
        Topic boost table.
    """

    weights: Weights = field(default_factory=Weights)
    limits: Limits = field(default_factory=Limits)
    synonyms: dict[str, tuple[str, ...]] = field(default_factory=dict)
    topics: tuple[Topic, ...] = ()

    def __post_init__(self) -> None:
        if self.weights.phrase <= self.weights.exact_word:
            logger.warning(
                "Phrase bonus (%d) does not exceed exact-word weight (%d)",
                self.weights.phrase,
                self.weights.exact_word,
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScoringPolicy:
        """Build a policy from its YAML/dict form.

        Parameters
        ----------
        data : dict
            Mapping with optional ``weights``, ``limits``, ``synonyms`` and
            ``topics`` keys. Missing keys take dataclass defaults.

        Returns
        -------
        ScoringPolicy
        """
        synonyms = {
            str(key).lower(): tuple(str(s).lower() for s in values)
            for key, values in (data.get("synonyms") or {}).items()
        }
        topics = tuple(_topic_from_dict(entry) for entry in data.get("topics") or [])
        return cls(
            weights=Weights(**(data.get("weights") or {})),
            limits=Limits(**(data.get("limits") or {})),
            synonyms=synonyms,
            topics=topics,
        )


def _topic_from_dict(entry: Any) -> Topic:
    if not isinstance(entry, dict) or not entry.get("name"):
        msg = f"topic entry must be a mapping with a name, got {entry!r}"
        raise ValueError(msg)
    return Topic(
        name=str(entry["name"]),
        keywords=tuple(str(k).lower() for k in entry.get("keywords") or []),
        boost=int(entry.get("boost", 0)),
    )


@lru_cache(maxsize=1)
def default_policy() -> ScoringPolicy:
    """Return the packaged default policy (loaded once)."""
    return ScoringPolicy.from_dict(_load_yaml(DEFAULT_POLICY_PATH))


def load_policy(source: str | Path | dict[str, Any] | ScoringPolicy | None = None) -> ScoringPolicy:
    """Load a scoring policy, merging overrides over the packaged defaults.

    ``weights``, ``limits`` and ``synonyms`` are merged key by key; a
    ``topics`` list, when given, replaces the default topic table.

    Parameters
    ----------
    source : str | Path | dict | ScoringPolicy | None
        A YAML file path, a dict of overrides, an existing policy, or
        ``None`` for the defaults.

    Returns
    -------
    ScoringPolicy

    Raises
    ------
    FileNotFoundError
        If *source* is a path that does not exist.
    """
    if isinstance(source, ScoringPolicy):
        return source
    if source is None:
        return default_policy()

    if isinstance(source, dict):
        overrides = source
    else:
        path = Path(source)
        if not path.is_file():
            msg = f"Scoring policy file not found: {path}"
            raise FileNotFoundError(msg)
        overrides = _load_yaml(path)

    merged = copy.deepcopy(_load_yaml(DEFAULT_POLICY_PATH))
    for key in ("weights", "limits", "synonyms"):
        if overrides.get(key):
            merged.setdefault(key, {}).update(overrides[key])
    if overrides.get("topics") is not None:
        merged["topics"] = overrides["topics"]

    policy = ScoringPolicy.from_dict(merged)
    logger.debug("Loaded scoring policy with %d synonyms and %d topics", len(policy.synonyms), len(policy.topics))
    return policy


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file using PyYAML."""
    with open(path, encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}

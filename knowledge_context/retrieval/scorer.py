"""Heuristic keyword relevance scoring for knowledge snippets.

The ranking is a transparent additive pipeline rather than a statistical
model: each signal in :mod:`knowledge_context.retrieval.signals` adds a
fixed or counted weight, items are sorted by total score (newest first on
ties), and short queries that find nothing fall back to a loose
substring scan.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from knowledge_context.models import KnowledgeItem, ScoredItem
from knowledge_context.retrieval.policy import ScoringPolicy, load_policy
from knowledge_context.retrieval.signals import SIGNALS

logger = logging.getLogger(__name__)


def normalize_query(query: str) -> tuple[str, list[str]]:
    """Return the lowercased, trimmed query and its whitespace-split words."""
    normalized = query.lower().strip()
    return normalized, normalized.split()


def score_item(query_words: list[str], query: str, item: KnowledgeItem, policy: ScoringPolicy) -> ScoredItem:
    """Score one item against an already-normalized query.

    Parameters
    ----------
    query_words : list[str]
        Lowercased query words.
    query : str
        Lowercased, trimmed query string.
    item : KnowledgeItem
        The candidate snippet.
    policy : ScoringPolicy
        Weights and tables.

    Returns
    -------
    ScoredItem
        The item with its total score and per-signal reasons.
    """
    content = item.content.lower()
    scored = ScoredItem(item=item)
    for name, signal in SIGNALS:
        delta = signal(query_words, query, content, policy)
        if delta:
            scored.score += delta
            scored.reasons.append(f"{name} +{delta}")
    return scored


def rank(query: str, corpus: Iterable[KnowledgeItem], policy: ScoringPolicy | None = None) -> list[ScoredItem]:
    """Score every item and sort by score, then by recency.

    Parameters
    ----------
    query : str
        Raw user query.
    corpus : Iterable[KnowledgeItem]
        Items to rank.
    policy : ScoringPolicy | None
        Scoring policy; ``None`` uses the packaged default.

    Returns
    -------
    list[ScoredItem]
        All items, best first. Empty for an empty query.
    """
    policy = load_policy(policy)
    normalized, words = normalize_query(query)
    if not words:
        return []
    scored = [score_item(words, normalized, item, policy) for item in corpus]
    scored.sort(key=lambda s: (-s.score, -s.item.timestamp))
    return scored


def explain(query: str, corpus: Iterable[KnowledgeItem], policy: ScoringPolicy | None = None) -> list[ScoredItem]:
    """Rank the corpus and log each item's score breakdown at DEBUG level."""
    ranked = rank(query, corpus, policy)
    for scored in ranked:
        logger.debug(
            "score=%d ts=%d reasons=[%s] content=%.60r",
            scored.score,
            scored.item.timestamp,
            ", ".join(scored.reasons),
            scored.item.content,
        )
    return ranked


def retrieve_context(
    query: str,
    corpus: Iterable[KnowledgeItem],
    policy: ScoringPolicy | None = None,
) -> list[str]:
    """Return the snippets most likely to help answer *query*.

    Short queries keep zero-score items as candidates and allow more
    results; longer queries drop zero-score noise and return fewer. When
    nothing survives and the query is short, a loose substring scan
    returns a handful of matches regardless of score.

    Parameters
    ----------
    query : str
        Raw user query.
    corpus : Iterable[KnowledgeItem]
        Full knowledge corpus.
    policy : ScoringPolicy | None
        Scoring policy; ``None`` uses the packaged default.

    Returns
    -------
    list[str]
        Snippet contents, best first. Never raises for string input.
    """
    policy = load_policy(policy)
    normalized, words = normalize_query(query)
    if not words:
        return []

    corpus = list(corpus)
    ranked = explain(normalized, corpus, policy)

    limits = policy.limits
    short = len(words) <= limits.short_query_max_words
    min_score = 0 if short else 1
    cap = limits.short_query_limit if short else limits.long_query_limit
    results = [s.item.content for s in ranked if s.score >= min_score][:cap]

    if not results and len(words) <= limits.fallback_max_words:
        results = _broad_matches(words, corpus, limits.fallback_limit)
        if results:
            logger.debug("Broadened search matched %d items for %r", len(results), normalized)

    logger.debug("Retrieved %d context items for %r", len(results), normalized)
    return results


def _broad_matches(words: list[str], corpus: list[KnowledgeItem], limit: int) -> list[str]:
    """Loose containment test in either direction, newest items first."""
    matches = []
    for item in sorted(corpus, key=lambda i: -i.timestamp):
        content = item.content.lower()
        if any(word in content or content in word for word in words):
            matches.append(item.content)
            if len(matches) >= limit:
                break
    return matches

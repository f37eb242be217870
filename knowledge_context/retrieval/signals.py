"""Independent relevance signals.

Every signal has the same signature::

    signal(query_words, query, content, policy) -> int

where ``query_words`` and ``query`` are already lowercased and trimmed and
``content`` is the lowercased snippet. Each returns a non-negative delta;
the scorer sums them. Signals overlap on purpose: a whole-word hit also
counts as a substring hit.
"""

from __future__ import annotations

import re

from knowledge_context.retrieval.policy import ScoringPolicy


def _eligible(query_words: list[str]) -> list[str]:
    return [word for word in query_words if len(word) > 1]


def exact_word_score(query_words: list[str], query: str, content: str, policy: ScoringPolicy) -> int:
    """Weight per query word that appears as a whole word in the content."""
    hits = sum(1 for word in _eligible(query_words) if re.search(rf"\b{re.escape(word)}\b", content))
    return hits * policy.weights.exact_word


def substring_score(query_words: list[str], query: str, content: str, policy: ScoringPolicy) -> int:
    """Weight per query word contained anywhere in the content, even mid-word."""
    hits = sum(1 for word in _eligible(query_words) if word in content)
    return hits * policy.weights.substring


def phrase_score(query_words: list[str], query: str, content: str, policy: ScoringPolicy) -> int:
    """Bonus when a multi-word query appears verbatim."""
    if len(query_words) > 1 and query in content:
        return policy.weights.phrase
    return 0


def partial_overlap_score(query_words: list[str], query: str, content: str, policy: ScoringPolicy) -> int:
    """Reward content that loosely covers at least half of a multi-word query.

    A query word matches when it and some content token contain one
    another, in either direction.
    """
    if len(query_words) <= 1:
        return 0
    tokens = content.split()
    matched = sum(
        1 for word in _eligible(query_words) if any(word in token or token in word for token in tokens)
    )
    if matched >= max(1, len(query_words) * 0.5):
        return matched * policy.weights.partial_overlap
    return 0


def synonym_score(query_words: list[str], query: str, content: str, policy: ScoringPolicy) -> int:
    """Weight per query keyword whose synonyms appear in the content."""
    hits = 0
    for word in _eligible(query_words):
        synonyms = policy.synonyms.get(word)
        if synonyms and any(syn in content for syn in synonyms):
            hits += 1
    return hits * policy.weights.synonym


def topic_boost_score(query_words: list[str], query: str, content: str, policy: ScoringPolicy) -> int:
    """Boost content for every topic the query mentions.

    A topic is active when any query word is one of its keywords; the
    content then earns the topic boost once per keyword it contains.
    """
    total = 0
    for topic in policy.topics:
        if any(word in topic.keywords for word in query_words):
            present = sum(1 for keyword in topic.keywords if keyword in content)
            total += present * topic.boost
    return total


SIGNALS = (
    ("exact_word", exact_word_score),
    ("substring", substring_score),
    ("phrase", phrase_score),
    ("partial_overlap", partial_overlap_score),
    ("synonym", synonym_score),
    ("topic_boost", topic_boost_score),
)

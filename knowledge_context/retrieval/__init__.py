"""Keyword relevance scoring over the knowledge corpus."""

from knowledge_context.retrieval.policy import Limits, ScoringPolicy, Topic, Weights, default_policy, load_policy
from knowledge_context.retrieval.retriever import KnowledgeRetriever
from knowledge_context.retrieval.scorer import explain, normalize_query, rank, retrieve_context, score_item

__all__ = [
    "KnowledgeRetriever",
    "Limits",
    "ScoringPolicy",
    "Topic",
    "Weights",
    "default_policy",
    "explain",
    "load_policy",
    "normalize_query",
    "rank",
    "retrieve_context",
    "score_item",
]

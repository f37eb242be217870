"""Knowledge-base retrieval and grounded chat for the company assistant."""

from knowledge_context.api import add_knowledge, answer_question, reload_defaults, retrieve_context
from knowledge_context.backup import backup_if_due, export_knowledge, import_knowledge
from knowledge_context.chat import ChatAssistant
from knowledge_context.config import KnowledgeConfig, load_config
from knowledge_context.models import ChatAnswer, KnowledgeItem, ScoredItem
from knowledge_context.retrieval import KnowledgeRetriever, ScoringPolicy, load_policy
from knowledge_context.store import KnowledgeStore, StorageError, build_store, initialize_store

__all__ = [
    "ChatAnswer",
    "ChatAssistant",
    "KnowledgeConfig",
    "KnowledgeItem",
    "KnowledgeRetriever",
    "KnowledgeStore",
    "ScoredItem",
    "ScoringPolicy",
    "StorageError",
    "add_knowledge",
    "answer_question",
    "backup_if_due",
    "build_store",
    "export_knowledge",
    "import_knowledge",
    "initialize_store",
    "load_config",
    "load_policy",
    "reload_defaults",
    "retrieve_context",
]

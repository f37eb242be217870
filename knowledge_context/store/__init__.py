"""Knowledge store abstraction and built-in backends."""

from knowledge_context.store.base import KnowledgeStore, StorageError, StoreRegistry
from knowledge_context.store.defaults import load_default_knowledge
from knowledge_context.store.factory import build_store, initialize_store
from knowledge_context.store.json_file import JsonFileKnowledgeStore
from knowledge_context.store.memory import MemoryKnowledgeStore

__all__ = [
    "JsonFileKnowledgeStore",
    "KnowledgeStore",
    "MemoryKnowledgeStore",
    "StorageError",
    "StoreRegistry",
    "build_store",
    "initialize_store",
    "load_default_knowledge",
]

"""Shared fixtures for knowledge_context tests."""

import pytest

from knowledge_context.models import KnowledgeItem
from knowledge_context.store.json_file import JsonFileKnowledgeStore
from knowledge_context.store.memory import MemoryKnowledgeStore

HQ_FACT = "COMPANY FACT: HQ is in Columbus, Indiana."
KNOWN_FOR = "QUESTION: What is Tallman known for?\nANSWER: Tools for utilities."


@pytest.fixture(autouse=True)
def _clear_knowledge_env(monkeypatch):
    """Keep developer environment overrides out of config-dependent tests."""
    for name in (
        "KNOWLEDGE_STORE_TYPE",
        "KNOWLEDGE_STORE_PATH",
        "KNOWLEDGE_BACKEND_TYPE",
        "KNOWLEDGE_BACKEND_MODEL",
        "KNOWLEDGE_BACKEND_TEMPERATURE",
        "KNOWLEDGE_BACKEND_MAX_TOKENS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def sample_corpus():
    """Two-item corpus from the Columbus location scenario."""
    return [
        KnowledgeItem(content=KNOWN_FOR, timestamp=1000),
        KnowledgeItem(content=HQ_FACT, timestamp=2000),
    ]


@pytest.fixture()
def memory_store(sample_corpus):
    return MemoryKnowledgeStore(sample_corpus)


@pytest.fixture()
def json_store(tmp_path):
    return JsonFileKnowledgeStore(tmp_path / "knowledge.json")

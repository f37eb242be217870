"""Tests for knowledge store backends, seeding and the store registry."""

import json
import threading

import pytest

from knowledge_context.models import KnowledgeItem
from knowledge_context.store import (
    JsonFileKnowledgeStore,
    MemoryKnowledgeStore,
    StorageError,
    StoreRegistry,
    build_store,
    initialize_store,
    load_default_knowledge,
)

ITEMS = [
    KnowledgeItem(content="Hours: Mon-Fri 7-5", timestamp=1000),
    KnowledgeItem(content="Main: 877-860-5666", timestamp=2000),
]


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryKnowledgeStore()
    return JsonFileKnowledgeStore(tmp_path / "knowledge.json")


# -- Shared contract -----------------------------------------------------------


def test_new_store_is_empty(store):
    assert store.count() == 0
    assert store.get_all_items() == []


def test_add_and_get(store):
    store.add_item(ITEMS[0])
    assert store.get_all_items() == [ITEMS[0]]
    assert store.count() == 1


def test_duplicates_allowed(store):
    store.add_item(ITEMS[0])
    store.add_item(ITEMS[0])
    assert store.count() == 2


def test_bulk_add(store):
    store.bulk_add_items(ITEMS)
    assert sorted(store.get_all_items(), key=lambda i: i.timestamp) == ITEMS


def test_bulk_add_accepts_generator(store):
    store.bulk_add_items(item for item in ITEMS)
    assert store.count() == 2


def test_clear(store):
    store.bulk_add_items(ITEMS)
    store.clear()
    assert store.count() == 0


def test_get_all_items_is_snapshot(store):
    store.add_item(ITEMS[0])
    snapshot = store.get_all_items()
    snapshot.append(ITEMS[1])
    assert store.count() == 1


def test_seed_if_empty(store):
    assert store.seed_if_empty(ITEMS) == 2
    assert store.seed_if_empty([KnowledgeItem(content="extra", timestamp=3)]) == 0
    assert store.count() == 2


def test_reset_to_defaults(store):
    store.add_item(KnowledgeItem(content="custom fact", timestamp=5))
    assert store.reset_to_defaults(ITEMS) == 2
    assert "custom fact" not in [item.content for item in store.get_all_items()]


def test_concurrent_adds_are_not_lost(store):
    def worker(n):
        for i in range(10):
            store.add_item(KnowledgeItem(content=f"worker {n} item {i}", timestamp=n * 100 + i))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert store.count() == 80


def test_two_json_stores_on_one_file_share_writes(tmp_path):
    path = tmp_path / "knowledge.json"
    stores = [JsonFileKnowledgeStore(path), JsonFileKnowledgeStore(tmp_path / "." / "knowledge.json")]

    def worker(n):
        for i in range(50):
            stores[n].add_item(KnowledgeItem(content=f"store {n} item {i}", timestamp=n * 1000 + i))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert JsonFileKnowledgeStore(path).count() == 100


# -- JSON file backend ---------------------------------------------------------


def test_json_store_persists_across_instances(tmp_path):
    path = tmp_path / "knowledge.json"
    JsonFileKnowledgeStore(path).bulk_add_items(ITEMS)
    assert JsonFileKnowledgeStore(path).get_all_items() == ITEMS


def test_json_store_file_format(json_store):
    json_store.add_item(ITEMS[0])
    data = json.loads(json_store.path.read_text(encoding="utf-8"))
    assert data == [{"content": "Hours: Mon-Fri 7-5", "timestamp": 1000}]


def test_json_store_leaves_no_temp_files(json_store):
    json_store.bulk_add_items(ITEMS)
    assert [p.name for p in json_store.path.parent.iterdir()] == ["knowledge.json"]


def test_json_store_creates_parent_directory(tmp_path):
    store = JsonFileKnowledgeStore(tmp_path / "nested" / "dir" / "knowledge.json")
    store.add_item(ITEMS[0])
    assert store.count() == 1


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        '{"content": "x", "timestamp": 1}',
        '[{"content": 5, "timestamp": 1}]',
    ],
)
def test_json_store_bad_file_raises_storage_error(tmp_path, payload):
    path = tmp_path / "knowledge.json"
    path.write_text(payload, encoding="utf-8")
    store = JsonFileKnowledgeStore(path)
    with pytest.raises(StorageError):
        store.get_all_items()
    with pytest.raises(StorageError):
        store.add_item(ITEMS[0])
    assert path.read_text(encoding="utf-8") == payload


def test_json_store_write_failure_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    store = JsonFileKnowledgeStore(blocker / "knowledge.json")
    with pytest.raises(StorageError, match="Failed to write"):
        store.add_item(ITEMS[0])


def test_storage_error_is_chained(tmp_path):
    path = tmp_path / "knowledge.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError) as excinfo:
        JsonFileKnowledgeStore(path).count()
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)


# -- Registry and factory ------------------------------------------------------


def test_registry_lists_builtin_stores():
    assert {"json", "memory"} <= set(StoreRegistry.available())


def test_registry_unknown_store():
    with pytest.raises(KeyError, match="Unknown store"):
        StoreRegistry.create("nonexistent_store_xyz")


def test_build_store_from_dict(tmp_path):
    store = build_store({"store": {"type": "json", "path": str(tmp_path / "kb.json")}})
    assert isinstance(store, JsonFileKnowledgeStore)
    assert store.path == tmp_path / "kb.json"


def test_build_store_memory():
    assert isinstance(build_store({"store": {"type": "memory"}}), MemoryKnowledgeStore)


# -- Defaults and initialization -----------------------------------------------


def test_packaged_default_catalog():
    items = load_default_knowledge()
    assert len(items) == 72
    assert all(isinstance(item.timestamp, int) for item in items)
    assert any(item.content.startswith("HQ: 6440 S International Dr") for item in items)


def test_load_default_knowledge_custom_file(tmp_path):
    path = tmp_path / "seed.yaml"
    path.write_text("items:\n  - content: Custom fact\n    timestamp: 42\n", encoding="utf-8")
    assert load_default_knowledge(path) == [KnowledgeItem(content="Custom fact", timestamp=42)]


def test_load_default_knowledge_missing_file():
    with pytest.raises(FileNotFoundError, match="Default knowledge file not found"):
        load_default_knowledge("/nonexistent/seed.yaml")


def test_initialize_store_seeds_packaged_catalog():
    store = MemoryKnowledgeStore()
    assert initialize_store(store) == 72
    assert initialize_store(store) == 0
    assert store.count() == 72


def test_initialize_store_keeps_existing_content():
    store = MemoryKnowledgeStore(ITEMS)
    assert initialize_store(store) == 0
    assert store.get_all_items() == ITEMS


def test_initialize_store_custom_defaults():
    store = MemoryKnowledgeStore()
    assert initialize_store(store, ITEMS) == 2


def test_json_store_failed_replace_keeps_previous_file(json_store, monkeypatch):
    json_store.add_item(ITEMS[0])

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("knowledge_context.store.json_file.os.replace", fail_replace)
    with pytest.raises(StorageError, match="Failed to write"):
        json_store.add_item(ITEMS[1])
    monkeypatch.undo()
    assert json_store.get_all_items() == [ITEMS[0]]
    assert [p.name for p in json_store.path.parent.iterdir()] == ["knowledge.json"]

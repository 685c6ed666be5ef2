import threading

import pytest

from backend.core.errors import NotFound, StoreUnavailable, ValidationError
from backend.database.connection import create_store_engine
from backend.database.storage import TaskStore, clean_title


def test_clean_title():
    assert clean_title("  Buy milk  ") == "Buy milk"
    for raw in ("", "   ", "\t\n", None, 5):
        with pytest.raises(ValidationError, match="Title is required"):
            clean_title(raw)


def test_create_and_list(store):
    created = store.create_task("  Buy milk  ")
    assert created["title"] == "Buy milk"
    assert store.list_tasks() == [created]


def test_invalid_title_inserts_nothing(store):
    with pytest.raises(ValidationError):
        store.create_task("   ")
    assert store.list_tasks() == []


def test_ids_are_unique(store):
    ids = [store.create_task(f"task {n}")["id"] for n in range(5)]
    assert len(set(ids)) == 5


def test_toggle_and_not_found(store):
    task = store.create_task("Read")
    assert store.toggle_task(task["id"])["is_done"] is True
    assert store.toggle_task(task["id"])["is_done"] is False
    with pytest.raises(NotFound):
        store.toggle_task(task["id"] + 100)


def test_concurrent_toggles_are_not_lost(tmp_path):
    store = TaskStore(create_store_engine(f"sqlite:///{tmp_path / 'tasks.db'}"))
    store.create_schema()
    task = store.create_task("Flip me")
    threads = [threading.Thread(target=store.toggle_task, args=(task["id"],)) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    # an even number of flips lands back on the original value
    assert store.list_tasks()[0]["is_done"] is False
    store.dispose()


def test_delete(store):
    task = store.create_task("Gone soon")
    store.delete_task(task["id"])
    assert all(t["id"] != task["id"] for t in store.list_tasks())
    with pytest.raises(NotFound):
        store.delete_task(task["id"])


def test_get_time_is_iso_string(store):
    value = store.get_time()
    assert isinstance(value, str)
    assert "T" in value


def test_create_schema_is_idempotent(store):
    task = store.create_task("Survives")
    store.create_schema()
    assert store.list_tasks() == [task]


def test_missing_table_raises_store_unavailable(store):
    from sqlalchemy import text

    with store.engine.begin() as conn:
        conn.execute(text("DROP TABLE tasks"))
    with pytest.raises(StoreUnavailable):
        store.list_tasks()
    with pytest.raises(StoreUnavailable):
        store.create_task("x")


def test_out_of_range_ids_are_not_found(store):
    for task_id in (0, -1, 2**63, 10**20):
        with pytest.raises(NotFound):
            store.toggle_task(task_id)
        with pytest.raises(NotFound):
            store.delete_task(task_id)

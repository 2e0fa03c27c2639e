"""
Tests for storage backends
"""
import os
import threading
from unittest.mock import MagicMock

import pytest

from conftest import make_store
from mycore.core.exceptions import DatabaseError, NotConfiguredError
from mycore.models.habit import InterestType
from mycore.models.user import AuthIdentity, Permissions
from mycore.services.habits.suggestions import SUGGESTED_HABITS
from mycore.services.storage import JsonFileStorage, MemoryStorage, SupabaseStorage
from mycore.services.storage import json_file
from mycore.services.storage.base import HABITS, TASKS


def test_memory_rows_are_copies():
    storage = MemoryStorage()
    row = {"id": "t1", "title": "x", "tags": []}
    storage.put(TASKS, row)
    row["tags"].append("mutated")
    fetched = storage.get(TASKS, "t1")
    fetched["title"] = "changed"
    assert storage.get(TASKS, "t1") == {"id": "t1", "title": "x", "tags": []}


def test_memory_filters():
    storage = MemoryStorage()
    storage.upsert(TASKS, [
        {"id": "1", "user_id": "u1", "due": "a"},
        {"id": "2", "user_id": "u1", "due": "b"},
        {"id": "3", "user_id": "u2", "due": "a"},
    ])
    assert [r["id"] for r in storage.select(TASKS, user_id="u1", due="a")] == ["1"]
    assert sorted(r["id"] for r in storage.select_in(TASKS, "due", ["a"])) == ["1", "3"]
    assert storage.update(TASKS, "missing", {"due": "c"}) is None

    storage.delete_where(TASKS, user_id="u1")
    assert [r["id"] for r in storage.select(TASKS)] == ["3"]
    storage.delete(TASKS, "missing")


def test_memory_storage_shared_between_threads():
    storage = MemoryStorage()
    errors = []

    def writer():
        try:
            for i in range(2000):
                storage.put(TASKS, {"id": f"t{i}", "user_id": "u1"})
        except Exception as e:
            errors.append(e)

    def reader():
        try:
            for _ in range(400):
                storage.select(TASKS, user_id="u1")
                storage.select_in(TASKS, "id", ["t1", "t2"])
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(storage.select(TASKS)) == 2000


def test_json_storage_survives_restart(tmp_path):
    path = str(tmp_path / "data.json")
    store = make_store(JsonFileStorage(path))
    store.bind_identity(AuthIdentity(id="u1", email="a@b.co"))
    store.init_user("a@b.co", "A")
    store.complete_onboarding("u1", [InterestType.HEALTH], SUGGESTED_HABITS[:1], Permissions())
    store.update_instance_status("2024-06-04_u1-h1", True)

    reopened = make_store(JsonFileStorage(path))
    reopened.bind_identity(AuthIdentity(id="u1", email="a@b.co"))
    assert reopened.get_user().onboarded
    assert [h.streak for h in reopened.get_habits()] == [1]


def test_json_storage_rejects_corrupt_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json")
    with pytest.raises(DatabaseError):
        JsonFileStorage(str(path))


def test_json_storage_failed_write_keeps_memory_and_disk_in_step(tmp_path, monkeypatch):
    path = str(tmp_path / "data.json")
    storage = JsonFileStorage(path)
    storage.put(TASKS, {"id": "t1", "title": "saved"})

    def fail(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(json_file.os, "replace", fail)
    with pytest.raises(DatabaseError):
        storage.update(TASKS, "t1", {"title": "lost"})
    monkeypatch.undo()

    assert storage.get(TASKS, "t1")["title"] == "saved"
    assert not os.path.exists(f"{path}.tmp")

    storage.put(TASKS, {"id": "t2", "title": "next"})
    assert JsonFileStorage(path).get(TASKS, "t1")["title"] == "saved"


def test_supabase_upsert_uses_id_conflict():
    client = MagicMock()
    SupabaseStorage(client).upsert(HABITS, [{"id": "h1"}])
    client.table.assert_called_with(HABITS)
    client.table.return_value.upsert.assert_called_once_with([{"id": "h1"}], on_conflict="id")


def test_supabase_select_chains_filters():
    client = MagicMock()
    query = client.table.return_value.select.return_value
    query.eq.return_value = query
    query.execute.return_value.data = [{"id": "h1"}]

    assert SupabaseStorage(client).select(HABITS, user_id="u1") == [{"id": "h1"}]
    query.eq.assert_called_once_with("user_id", "u1")


def test_supabase_select_in_empty_skips_query():
    client = MagicMock()
    assert SupabaseStorage(client).select_in(HABITS, "date", []) == []
    client.table.assert_not_called()


def test_supabase_failures_become_database_errors():
    client = MagicMock()
    client.table.side_effect = RuntimeError("network down")
    with pytest.raises(DatabaseError):
        SupabaseStorage(client).get(HABITS, "h1")


def test_supabase_refuses_unfiltered_delete():
    with pytest.raises(DatabaseError):
        SupabaseStorage(MagicMock()).delete_where(HABITS)


def test_supabase_keeps_data_on_reset():
    assert SupabaseStorage.purges_on_reset is False
    assert MemoryStorage.purges_on_reset is True


def test_supabase_client_requires_credentials(monkeypatch):
    from mycore.core import dependencies
    from mycore.core.config import settings

    monkeypatch.setattr(settings, "SUPABASE_URL", "")
    dependencies.get_supabase_client.cache_clear()
    with pytest.raises(NotConfiguredError):
        dependencies.get_supabase_client()


def test_unknown_backend_fails_fast():
    from mycore.core.dependencies import build_storage

    with pytest.raises(NotConfiguredError):
        build_storage("firebase")

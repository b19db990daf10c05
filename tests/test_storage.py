"""Test script history and user stores."""

import pytest
from scriptstudio.config.schema import StudioConfig
from scriptstudio.storage import (
    DuplicateUserError, InMemoryScriptStore, InMemoryUserStore,
    SQLiteScriptStore, SQLiteUserStore, create_stores,
)


@pytest.fixture(params=["memory", "sqlite"])
def scripts(request, tmp_path):
    if request.param == "sqlite":
        return SQLiteScriptStore(tmp_path / "db" / "studio.db")
    return InMemoryScriptStore()


@pytest.fixture(params=["memory", "sqlite"])
def users(request, tmp_path):
    if request.param == "sqlite":
        return SQLiteUserStore(tmp_path / "studio.db")
    return InMemoryUserStore()


class TestScriptStore:
    """Behaviour shared by every ScriptStore backend."""

    def test_add_returns_record(self, scripts):
        record = scripts.add("u1", "  An idea  ", 3, "Scene 1: a")

        assert record.id
        assert record.idea == "An idea"
        assert record.amount == 3
        assert record.owner_id == "u1"
        assert record.to_dict()["createdAt"] == record.created_at.isoformat()

    def test_list_newest_first_and_owner_scoped(self, scripts):
        first = scripts.add("u1", "first idea", 1, "one")
        scripts.add("u2", "other owner", 1, "x")
        second = scripts.add("u1", "second idea", 2, "two")

        listed = scripts.list("u1")

        assert [r.id for r in listed] == [second.id, first.id]

    def test_anonymous_records_are_separate(self, scripts):
        scripts.add("u1", "owned idea", 1, "one")
        anon = scripts.add(None, "anonymous idea", 1, "two")

        assert [r.id for r in scripts.list(None)] == [anon.id]

    def test_list_limit(self, scripts):
        for i in range(5):
            scripts.add("u1", f"idea {i}", 1, "text")

        assert len(scripts.list("u1", limit=2)) == 2

    def test_get_is_owner_scoped(self, scripts):
        record = scripts.add("u1", "private idea", 4, "content")

        assert scripts.get(record.id, "u1").content == "content"
        assert scripts.get(record.id, "u2") is None
        assert scripts.get(record.id) is None
        assert scripts.get("missing", "u1") is None


class TestUserStore:
    """Behaviour shared by every UserStore backend."""

    def test_create_and_find_normalizes_email(self, users):
        user = users.create("Ada", "Ada@Example.com ", "hash")

        found = users.find_by_email("ada@example.COM")
        assert found is not None
        assert found.id == user.id
        assert found.email == "ada@example.com"

    def test_duplicate_email(self, users):
        users.create("Ada", "ada@example.com", "hash")

        with pytest.raises(DuplicateUserError):
            users.create("Other", "ADA@example.com", "hash2")

    def test_missing_user(self, users):
        assert users.find_by_email("nobody@example.com") is None


class TestSQLitePersistence:

    def test_records_survive_reopen(self, tmp_path):
        path = tmp_path / "studio.db"
        record = SQLiteScriptStore(path).add("u1", "durable idea", 5, "body")

        reopened = SQLiteScriptStore(path)

        assert reopened.get(record.id, "u1").idea == "durable idea"

    def test_amount_check_constraint(self, tmp_path):
        store = SQLiteScriptStore(tmp_path / "studio.db")

        with pytest.raises(Exception):
            store.add("u1", "too many scenes", 500, "body")


class TestCreateStores:

    def test_memory_backend(self):
        script_store, user_store = create_stores(StudioConfig())

        assert isinstance(script_store, InMemoryScriptStore)
        assert isinstance(user_store, InMemoryUserStore)

    def test_sqlite_backend(self, tmp_path):
        config = StudioConfig.model_validate(
            {"history": {"backend": "sqlite", "path": str(tmp_path / "h.db")}}
        )
        script_store, user_store = create_stores(config)

        assert isinstance(script_store, SQLiteScriptStore)
        assert isinstance(user_store, SQLiteUserStore)

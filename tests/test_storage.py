"""Tests for key-value storage backends."""
import json

import pytest

from campus_assistant.core.storage import InMemoryStore, JsonFileStore, KeyValueStore, create_store


class TestKeyValueStore:
    """Tests for the storage interface."""

    def test_store_is_abstract(self):
        with pytest.raises(TypeError):
            KeyValueStore()  # type: ignore

    def test_create_memory_store(self):
        assert isinstance(create_store("memory"), InMemoryStore)

    def test_create_unknown_backend_fails(self):
        with pytest.raises(ValueError):
            create_store("redis")


class TestInMemoryStore:
    """Tests for InMemoryStore and the shared helpers."""

    @pytest.mark.asyncio
    async def test_set_get_remove(self, memory_store):
        await memory_store.set("k", "v")
        assert await memory_store.get("k") == "v"

        await memory_store.remove("k")
        assert await memory_store.get("k") is None

    @pytest.mark.asyncio
    async def test_last_write_wins(self, memory_store):
        await memory_store.set("k", "first")
        await memory_store.set("k", "second")
        assert await memory_store.get("k") == "second"

    @pytest.mark.asyncio
    async def test_json_helpers(self, memory_store):
        await memory_store.set_json("badges", ["First Query"])
        assert await memory_store.get_json("badges") == ["First Query"]

    @pytest.mark.asyncio
    async def test_unparsable_json_returns_default(self, memory_store):
        await memory_store.set("broken", "{not json")
        assert await memory_store.get_json("broken", default=[]) == []

    @pytest.mark.asyncio
    async def test_clear(self, memory_store):
        await memory_store.set("a", "1")
        await memory_store.set("b", "2")
        await memory_store.clear()

        assert memory_store.keys() == []


class TestJsonFileStore:
    """Tests for the JSON file backend."""

    @pytest.mark.asyncio
    async def test_values_survive_reload(self, tmp_path):
        path = tmp_path / "store" / "offline.json"
        store = JsonFileStore(str(path))
        await store.set("lastSyncTime", "2026-10-17T09:00:00")

        reloaded = JsonFileStore(str(path))
        assert await reloaded.get("lastSyncTime") == "2026-10-17T09:00:00"

    @pytest.mark.asyncio
    async def test_remove_and_clear(self, tmp_path):
        path = tmp_path / "offline.json"
        store = JsonFileStore(str(path))
        await store.set("a", "1")
        await store.set("b", "2")
        await store.remove("a")

        assert json.loads(path.read_text(encoding="utf-8")) == {"b": "2"}

        await store.clear()
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_corrupt_file_starts_empty(self, tmp_path):
        path = tmp_path / "offline.json"
        path.write_text("not json", encoding="utf-8")

        store = JsonFileStore(str(path))
        assert store._data == {}

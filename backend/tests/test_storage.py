"""
Unit tests for the storage backends.
"""

import pytest
from types import SimpleNamespace
from unittest.mock import patch

from chatdesk.storage import LocalStorage, MemoryStorage, StoredValue, create_storage


class TestLocalStorage:
    """Tests for the file-backed key-value store."""

    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        assert await storage.get("all_chats") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        assert await storage.set("all_chats", '[{"id": "1"}]') is True
        stored = await storage.get("all_chats")
        assert stored == StoredValue(key="all_chats", value='[{"id": "1"}]')
        assert (tmp_path / "all_chats.json").exists()
        assert not (tmp_path / "all_chats.json.tmp").exists()

    @pytest.mark.asyncio
    async def test_overwrite(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        await storage.set("all_chats", "first")
        await storage.set("all_chats", "second")
        assert (await storage.get("all_chats")).value == "second"

    @pytest.mark.asyncio
    async def test_survives_new_instance(self, tmp_path):
        await LocalStorage(str(tmp_path)).set("all_chats", "[]")
        stored = await LocalStorage(str(tmp_path)).get("all_chats")
        assert stored.value == "[]"

    @pytest.mark.asyncio
    async def test_invalid_keys_fail_softly(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        assert await storage.set("../escape", "x") is False
        assert await storage.set("a/b", "x") is False
        assert await storage.get("../escape") is None

    @pytest.mark.asyncio
    async def test_write_error_returns_false(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        with patch("chatdesk.storage.local_storage.os.replace", side_effect=OSError("disk full")):
            assert await storage.set("all_chats", "[]") is False


class TestMemoryStorage:
    """Tests for the in-memory store."""

    @pytest.mark.asyncio
    async def test_set_then_get(self):
        storage = MemoryStorage()
        assert await storage.get("k") is None
        assert await storage.set("k", "v") is True
        assert (await storage.get("k")).value == "v"
        assert storage.raw("k") == "v"

    @pytest.mark.asyncio
    async def test_initial_data(self):
        storage = MemoryStorage({"k": "v"})
        assert (await storage.get("k")).value == "v"


class TestCreateStorage:
    """Tests for the storage factory."""

    def test_local(self, tmp_path):
        config = SimpleNamespace(storage_type="local", local_storage_path=str(tmp_path))
        assert isinstance(create_storage(config), LocalStorage)

    def test_memory(self):
        config = SimpleNamespace(storage_type="memory", local_storage_path="")
        assert isinstance(create_storage(config), MemoryStorage)

    def test_unsupported_raises(self):
        config = SimpleNamespace(storage_type="s3", local_storage_path="")
        with pytest.raises(ValueError, match="Unsupported"):
            create_storage(config)

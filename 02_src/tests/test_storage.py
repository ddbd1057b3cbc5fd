"""Tests for Storage."""

from datetime import timedelta

import pytest

from autoreply.storage import Storage


class TestStorageInit:
    """Tests for Storage initialization."""

    async def test_init_creates_tables(self, storage):
        """Test that init creates the key-value table."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "kv_entries" in tables

    async def test_use_before_init_raises(self):
        """Test that operations before init() raise."""
        st = Storage(":memory:")
        with pytest.raises(RuntimeError, match="not initialized"):
            await st.get("config")

    async def test_close_clears_connection(self):
        """Test that close() drops the connection."""
        st = Storage(":memory:")
        await st.init()
        await st.close()
        assert st._conn is None


class TestStorageGetPut:
    """Tests for get/put/delete."""

    async def test_get_missing_returns_none(self, storage):
        assert await storage.get("nope") is None

    async def test_put_then_get(self, storage):
        await storage.put("config", '{"enabled": true}')
        assert await storage.get("config") == '{"enabled": true}'

    async def test_put_replaces_value(self, storage):
        await storage.put("k", "one")
        await storage.put("k", "two")
        assert await storage.get("k") == "two"

    async def test_delete(self, storage):
        await storage.put("k", "v")
        await storage.delete("k")
        assert await storage.get("k") is None

    async def test_delete_missing_is_harmless(self, storage):
        await storage.delete("never-written")


class TestStorageExpiry:
    """Tests for per-key TTL."""

    async def test_value_visible_before_expiry(self, storage, clock):
        await storage.put("k", "v", ttl=timedelta(hours=1))
        clock.advance(3599)
        assert await storage.get("k") == "v"

    async def test_value_hidden_after_expiry(self, storage, clock):
        await storage.put("k", "v", ttl=timedelta(hours=1))
        clock.advance(3600)
        assert await storage.get("k") is None

    async def test_no_ttl_never_expires(self, storage, clock):
        await storage.put("k", "v")
        clock.advance(10 * 365 * 24 * 3600)
        assert await storage.get("k") == "v"

    async def test_purge_expired_removes_only_expired(self, storage, clock):
        await storage.put("short", "v", ttl=timedelta(seconds=10))
        await storage.put("long", "v", ttl=timedelta(days=1))
        await storage.put("forever", "v")
        clock.advance(60)

        removed = await storage.purge_expired()

        assert removed == 1
        assert await storage.get("long") == "v"
        assert await storage.get("forever") == "v"


class TestStoragePutIfAbsent:
    """Tests for atomic create-if-absent."""

    async def test_creates_missing_key(self, storage):
        assert await storage.put_if_absent("k", "first") is True
        assert await storage.get("k") == "first"

    async def test_keeps_existing_value(self, storage):
        await storage.put("k", "first")
        assert await storage.put_if_absent("k", "second") is False
        assert await storage.get("k") == "first"

    async def test_overwrites_expired_value(self, storage, clock):
        await storage.put("k", "old", ttl=timedelta(seconds=5))
        clock.advance(10)

        assert await storage.put_if_absent("k", "new") is True
        assert await storage.get("k") == "new"


class TestStorageCountPrefix:
    """Tests for count_prefix."""

    async def test_counts_live_prefixed_keys(self, storage, clock):
        await storage.put("replied:a", "1")
        await storage.put("replied:b", "1", ttl=timedelta(seconds=5))
        await storage.put("config", "{}")
        assert await storage.count_prefix("replied:") == 2

        clock.advance(10)
        assert await storage.count_prefix("replied:") == 1

    async def test_prefix_is_literal(self, storage):
        """Test that LIKE wildcards in keys are not interpreted."""
        await storage.put("replied_x", "1")
        assert await storage.count_prefix("replied%") == 0


class TestStorageClear:
    """Tests for clear()."""

    async def test_clear_removes_everything(self, storage):
        await storage.put("a", "1")
        await storage.put("b", "2")
        await storage.clear()
        assert await storage.get("a") is None
        assert await storage.count_prefix("") == 0

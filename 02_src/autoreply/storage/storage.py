"""SQLite key-value storage implementation."""

import time
from datetime import timedelta
from pathlib import Path
from typing import Callable, Protocol

import aiosqlite

from ..config import resolve_db_path

Clock = Callable[[], float]


class IStorage(Protocol):
    """Durable key-value map with per-key expiry (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    async def get(self, key: str) -> str | None:
        """Get a live value, or None if missing or expired."""
        ...

    async def put(self, key: str, value: str, ttl: timedelta | None = None) -> None:
        """Insert or replace a value, optionally expiring after ``ttl``."""
        ...

    async def put_if_absent(
        self, key: str, value: str, ttl: timedelta | None = None
    ) -> bool:
        """Create the key only if no live value exists. Return True if written."""
        ...

    async def delete(self, key: str) -> None:
        """Delete a key (no error if missing)."""
        ...

    async def count_prefix(self, prefix: str) -> int:
        """Count live keys starting with ``prefix``."""
        ...

    async def purge_expired(self) -> int:
        """Delete expired rows. Return the number removed."""
        ...

    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite key-value storage implementation."""

    def __init__(self, db_path: str | Path | None = None, clock: Clock = time.time):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._clock = clock
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    def _expires_at(self, ttl: timedelta | None) -> float | None:
        if ttl is None:
            return None
        return self._clock() + ttl.total_seconds()

    async def get(self, key: str) -> str | None:
        """Get a live value, or None if missing or expired."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            SELECT value
            FROM kv_entries
            WHERE key = ? AND (expires_at IS NULL OR expires_at > ?)
            """,
            (key, self._clock()),
        )
        row = await cursor.fetchone()

        if not row:
            return None

        return row[0]

    async def put(self, key: str, value: str, ttl: timedelta | None = None) -> None:
        """Insert or replace a value, optionally expiring after ``ttl``."""
        conn = self._require_conn()

        await conn.execute(
            """
            INSERT OR REPLACE INTO kv_entries (key, value, expires_at, updated_at)
            VALUES (?, ?, ?, CURRENT_TIMESTAMP)
            """,
            (key, value, self._expires_at(ttl)),
        )
        await conn.commit()

    async def put_if_absent(
        self, key: str, value: str, ttl: timedelta | None = None
    ) -> bool:
        """Create the key only if no live value exists. Return True if written."""
        conn = self._require_conn()

        # An expired row counts as absent and is overwritten in place.
        cursor = await conn.execute(
            """
            INSERT INTO kv_entries (key, value, expires_at, updated_at)
            VALUES (?, ?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                expires_at = excluded.expires_at,
                updated_at = CURRENT_TIMESTAMP
            WHERE kv_entries.expires_at IS NOT NULL AND kv_entries.expires_at <= ?
            """,
            (key, value, self._expires_at(ttl), self._clock()),
        )
        written = cursor.rowcount > 0
        await conn.commit()
        return written

    async def delete(self, key: str) -> None:
        """Delete a key (no error if missing)."""
        conn = self._require_conn()

        await conn.execute("DELETE FROM kv_entries WHERE key = ?", (key,))
        await conn.commit()

    async def count_prefix(self, prefix: str) -> int:
        """Count live keys starting with ``prefix``."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            SELECT COUNT(*)
            FROM kv_entries
            WHERE substr(key, 1, ?) = ?
              AND (expires_at IS NULL OR expires_at > ?)
            """,
            (len(prefix), prefix, self._clock()),
        )
        row = await cursor.fetchone()
        return row[0] if row else 0

    async def purge_expired(self) -> int:
        """Delete expired rows. Return the number removed."""
        conn = self._require_conn()

        cursor = await conn.execute(
            "DELETE FROM kv_entries WHERE expires_at IS NOT NULL AND expires_at <= ?",
            (self._clock(),),
        )
        removed = cursor.rowcount
        await conn.commit()
        return removed

    async def clear(self) -> None:
        """Clear all data."""
        conn = self._require_conn()

        await conn.execute("DELETE FROM kv_entries")
        await conn.commit()

"""Correspondent ledger: who already received the automated reply."""

from datetime import timedelta
from typing import Protocol

from ..logging_config import get_logger
from ..storage import IStorage

logger = get_logger(__name__)

NOTIFIED_PREFIX = "replied:"
NOTIFIED_TTL = timedelta(days=365)
NOTIFIED_SENTINEL = "1"


class ICorrespondentLedger(Protocol):
    """Durable record of notified correspondents, with expiry."""

    async def has_notified(self, correspondent_id: str) -> bool:
        """Check for a live notified marker."""
        ...

    async def mark_notified(self, correspondent_id: str) -> None:
        """Record a confirmed reply. Idempotent."""
        ...


class CorrespondentLedger:
    """Ledger stored as prefixed keys in the key-value store.

    Writes only happen after a confirmed send, so a crash between send and
    write can at worst repeat a reply, never suppress a first one.
    """

    def __init__(
        self,
        storage: IStorage,
        ttl: timedelta = NOTIFIED_TTL,
        prefix: str = NOTIFIED_PREFIX,
    ):
        self._storage = storage
        self._ttl = ttl
        self._prefix = prefix

    def key_for(self, correspondent_id: str) -> str:
        """Storage key for a correspondent."""
        return f"{self._prefix}{correspondent_id}"

    async def has_notified(self, correspondent_id: str) -> bool:
        """Check for a live notified marker."""
        value = await self._storage.get(self.key_for(correspondent_id))
        return value is not None

    async def mark_notified(self, correspondent_id: str) -> None:
        """Record a confirmed reply. Idempotent."""
        await self._storage.put(
            self.key_for(correspondent_id), NOTIFIED_SENTINEL, ttl=self._ttl
        )
        logger.debug("Marked %s as notified", correspondent_id)

    async def notified_count(self) -> int:
        """Number of correspondents with a live marker."""
        return await self._storage.count_prefix(self._prefix)

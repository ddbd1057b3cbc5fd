"""DispatchEngine: one paginated scan that replies to first contacts."""

import asyncio
from datetime import datetime, timezone
from typing import Awaitable, Callable, Protocol

from ..ledger import ICorrespondentLedger
from ..logging_config import get_logger
from ..models import Conversation, CycleReport, DispatchConfig
from ..source import IConversationSource, truncate_graphemes

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 50

Sleeper = Callable[[float], Awaitable[None]]


class IDispatchEngine(Protocol):
    """Runs dispatch cycles against a conversation source."""

    async def run_cycle(self, config: DispatchConfig) -> CycleReport:
        """Scan all conversations once and reply to first contacts."""
        ...


class DispatchEngine:
    """Sequential, cursor-paginated first-contact dispatcher.

    The engine holds no lock. Overlapping cycles are de-duplicated only by
    the ledger check before each send, so two cycles that both pass the
    check before either writes can still double-send.
    """

    def __init__(
        self,
        source: IConversationSource,
        ledger: ICorrespondentLedger,
        page_size: int = DEFAULT_PAGE_SIZE,
        sleep: Sleeper = asyncio.sleep,
    ):
        self._source = source
        self._ledger = ledger
        self._page_size = page_size
        self._sleep = sleep

    async def run_cycle(self, config: DispatchConfig) -> CycleReport:
        """Scan all conversations once and reply to first contacts.

        Listing errors propagate and abort the cycle. Send failures are
        logged and leave the correspondent eligible for the next cycle.
        """
        report = CycleReport(started_at=datetime.now(timezone.utc))

        if not config.enabled:
            report.finished_at = report.started_at
            return report

        own_did = self._source.account_did
        reply_text = truncate_graphemes(
            config.reply_text, self._source.max_message_length
        )
        cursor: str | None = None

        while True:
            page = await self._source.list_conversations(self._page_size, cursor)
            report.pages_fetched += 1
            cursor = page.cursor

            for conversation in page.conversations:
                report.conversations_seen += 1
                correspondent = await self._eligible_correspondent(
                    conversation, own_did
                )
                if correspondent is None:
                    continue

                cap = config.per_cycle_send_cap
                if cap is not None and report.sent_count >= cap:
                    # Remaining correspondents wait for the next trigger.
                    report.cap_reached = True
                    break

                if config.delay_seconds > 0:
                    await self._sleep(config.delay_seconds)

                sent = await self._source.send_message(conversation.id, reply_text)
                if not sent:
                    report.failed_sends += 1
                    logger.warning(
                        "Reply to %s failed; will retry next cycle",
                        correspondent,
                        extra={"context": {"conversation_id": conversation.id}},
                    )
                    continue

                # Must land before the next conversation is examined so a
                # repeated correspondent is seen as notified.
                await self._ledger.mark_notified(correspondent)
                report.sent_count += 1
                report.notified.append(correspondent)

            if report.cap_reached or not cursor:
                break

        report.finished_at = datetime.now(timezone.utc)
        if report.sent_count > 0 or report.failed_sends > 0:
            logger.info(
                "Replied to %d new DM(s)",
                report.sent_count,
                extra={
                    "context": {
                        "sent": report.sent_count,
                        "failed": report.failed_sends,
                        "seen": report.conversations_seen,
                        "pages": report.pages_fetched,
                        "cap_reached": report.cap_reached,
                    }
                },
            )
        return report

    async def _eligible_correspondent(
        self, conversation: Conversation, own_did: str
    ) -> str | None:
        """Return the correspondent to greet, or None to skip."""
        correspondent = conversation.other_participant(own_did)
        if correspondent is None:
            logger.debug("Skipping conversation %s: no single correspondent", conversation.id)
            return None

        # No last message, or our own: nothing to answer.
        if conversation.last_message is None or conversation.is_last_message_from(own_did):
            return None

        if await self._ledger.has_notified(correspondent):
            return None

        return correspondent

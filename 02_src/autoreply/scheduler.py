"""Recurring trigger for the reply cycle."""

from typing import Awaitable, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from .config import DEFAULT_CYCLE_CRON
from .logging_config import get_logger
from .models import CycleReport

logger = get_logger(__name__)

CYCLE_JOB_ID = "dm_reply_cycle"


class CycleScheduler:
    """Fires the reply cycle on a cron schedule (every minute by default)."""

    def __init__(
        self,
        run_cycle: Callable[[], Awaitable[CycleReport]],
        cron: str = DEFAULT_CYCLE_CRON,
    ) -> None:
        self._run_cycle = run_cycle
        self._cron = cron
        self.scheduler = AsyncIOScheduler()

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        """Start the scheduler."""
        self.scheduler.add_job(
            self.fire,
            trigger=CronTrigger.from_crontab(self._cron),
            id=CYCLE_JOB_ID,
            name="DM reply cycle",
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        logger.info("Cycle scheduler started with cron '%s'", self._cron)

    def stop(self) -> None:
        """Stop the scheduler."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Cycle scheduler stopped")

    async def fire(self) -> CycleReport:
        """Run one cycle. Failures are logged and re-raised to the scheduler."""
        try:
            return await self._run_cycle()
        except Exception:
            logger.exception("Reply cycle failed; retrying on next trigger")
            raise

"""CycleRunner: what the recurring trigger calls once per firing."""

from typing import Callable

from ..ledger import ICorrespondentLedger
from ..logging_config import get_logger
from ..models import CycleReport
from ..source import IConversationSource
from ..storage import ConfigStore
from .engine import DEFAULT_PAGE_SIZE, DispatchEngine

logger = get_logger(__name__)

SourceFactory = Callable[[], IConversationSource]


class CycleRunner:
    """Loads a config snapshot, opens a source, runs one engine cycle."""

    def __init__(
        self,
        config_store: ConfigStore,
        ledger: ICorrespondentLedger,
        source_factory: SourceFactory,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._config_store = config_store
        self._ledger = ledger
        self._source_factory = source_factory
        self._page_size = page_size

    async def run(self) -> CycleReport:
        """Run one cycle. Source errors propagate to the caller."""
        config = await self._config_store.snapshot()
        if not config.enabled:
            logger.debug("Reply flow disabled; skipping cycle")
            return CycleReport()

        source = self._source_factory()
        try:
            await source.login()
            engine = DispatchEngine(source, self._ledger, page_size=self._page_size)
            return await engine.run_cycle(config)
        finally:
            await source.close()

"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .config import Settings, resolve_db_path
from .dispatch import CycleRunner, SourceFactory
from .ledger import CorrespondentLedger
from .logging_config import get_logger
from .models import CycleReport
from .scheduler import CycleScheduler
from .source import BlueskyDmClient, IConversationSource, SourceUnavailableError
from .storage import ConfigStore, IStorage, Storage

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def run_cycle(self) -> CycleReport:
        """Run one reply cycle now."""
        ...


def bluesky_source_factory(settings: Settings) -> SourceFactory:
    """Build a factory that opens a fresh Bluesky client per cycle."""

    def factory() -> IConversationSource:
        if not settings.bsky_handle or not settings.bsky_app_password:
            raise SourceUnavailableError("BSKY_HANDLE or BSKY_APP_PASSWORD not set")
        return BlueskyDmClient(
            settings.bsky_handle,
            settings.bsky_app_password,
            settings.bsky_service_url,
        )

    return factory


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        db_path: str | None = None,
        settings: Settings | None = None,
        source_factory: SourceFactory | None = None,
    ):
        self._settings = settings or Settings.from_env()
        env_db_path = self._settings.database_url if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._source_factory = source_factory or bluesky_source_factory(self._settings)

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._config_store: ConfigStore | None = None
        self._ledger: CorrespondentLedger | None = None
        self._runner: CycleRunner | None = None
        self._scheduler: CycleScheduler | None = None
        self.last_cycle: CycleReport | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        purged = await self._storage.purge_expired()
        logger.info("Storage initialized (%d expired entries purged)", purged)

        # 2. Config store and ledger (depend on Storage)
        self._config_store = ConfigStore(self._storage)
        self._ledger = CorrespondentLedger(self._storage)

        # 3. Runner (depends on config store, ledger, source factory)
        self._runner = CycleRunner(
            self._config_store,
            self._ledger,
            self._source_factory,
            page_size=self._settings.page_size,
        )

        # 4. Scheduler (depends on Runner)
        if self._settings.scheduler_enabled:
            self._scheduler = CycleScheduler(self.run_cycle, cron=self._settings.cycle_cron)
            self._scheduler.start()

        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._scheduler:
            self._scheduler.stop()
            self._scheduler = None
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def run_cycle(self) -> CycleReport:
        """Run one reply cycle now and remember its report."""
        if not self._runner:
            raise RuntimeError("Application not started")
        report = await self._runner.run()
        self.last_cycle = report
        return report

    @property
    def settings(self) -> Settings:
        """Get process settings."""
        return self._settings

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def config_store(self) -> ConfigStore:
        """Get config store instance."""
        if not self._config_store:
            raise RuntimeError("Application not started")
        return self._config_store

    @property
    def ledger(self) -> CorrespondentLedger:
        """Get ledger instance."""
        if not self._ledger:
            raise RuntimeError("Application not started")
        return self._ledger

    @property
    def scheduler(self) -> CycleScheduler | None:
        """Get the scheduler, if enabled."""
        return self._scheduler

"""Tests for Application."""

import pytest

from autoreply.app import Application, bluesky_source_factory
from autoreply.config import Settings
from autoreply.models import BotConfig
from autoreply.source import BlueskyDmClient, SourceUnavailableError


class TestApplicationStart:
    """Tests for Application.start()."""

    @pytest.mark.asyncio
    async def test_start_initializes_components(self, application):
        """Test that start initializes all components."""
        await application.start()
        try:
            assert application.storage is not None
            assert application.config_store is not None
            assert application.ledger is not None
            assert application._runner is not None
        finally:
            await application.stop()

    @pytest.mark.asyncio
    async def test_start_creates_database_tables(self, application):
        """Test that start creates the kv table."""
        await application.start()
        try:
            async with application.storage._conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ) as cursor:
                tables = [row[0] for row in await cursor.fetchall()]
            assert "kv_entries" in tables
        finally:
            await application.stop()

    @pytest.mark.asyncio
    async def test_scheduler_disabled_by_settings(self, application):
        """Test that no scheduler runs when disabled."""
        await application.start()
        try:
            assert application.scheduler is None
        finally:
            await application.stop()

    @pytest.mark.asyncio
    async def test_scheduler_started_when_enabled(self, sim_source):
        """Test that the scheduler starts and stops with the application."""
        settings = Settings(admin_session_secret="s", scheduler_enabled=True)
        app = Application(db_path=":memory:", settings=settings, source_factory=lambda: sim_source)
        await app.start()
        scheduler = app.scheduler
        assert scheduler is not None
        assert scheduler.running is True

        await app.stop()
        assert app.scheduler is None


class TestApplicationNotStarted:
    """Tests for access before start()."""

    def test_properties_raise_before_start(self, application):
        with pytest.raises(RuntimeError, match="not started"):
            _ = application.storage
        with pytest.raises(RuntimeError, match="not started"):
            _ = application.config_store
        with pytest.raises(RuntimeError, match="not started"):
            _ = application.ledger

    @pytest.mark.asyncio
    async def test_run_cycle_before_start_raises(self, application):
        with pytest.raises(RuntimeError, match="not started"):
            await application.run_cycle()


class TestApplicationRunCycle:
    """Tests for Application.run_cycle()."""

    @pytest.mark.asyncio
    async def test_run_cycle_records_last_report(self, application, sim_source):
        await application.start()
        try:
            await application.config_store.save(BotConfig(enabled=True, setup_complete=True))
            convo_id = sim_source.add_conversation("did:plc:a")
            sim_source.receive(convo_id, "did:plc:a", "hello")

            report = await application.run_cycle()

            assert report.sent_count == 1
            assert application.last_cycle is report
            assert await application.ledger.notified_count() == 1
        finally:
            await application.stop()

    @pytest.mark.asyncio
    async def test_second_cycle_sends_nothing(self, application, sim_source):
        await application.start()
        try:
            await application.config_store.save(BotConfig(enabled=True, setup_complete=True))
            convo_id = sim_source.add_conversation("did:plc:a")
            sim_source.receive(convo_id, "did:plc:a", "hello")

            await application.run_cycle()
            sim_source.receive(convo_id, "did:plc:a", "are you there?")
            report = await application.run_cycle()

            assert report.sent_count == 0
            assert len(sim_source.sent_to("did:plc:a")) == 1
        finally:
            await application.stop()


class TestBlueskySourceFactory:
    """Tests for bluesky_source_factory()."""

    def test_missing_credentials_raise(self):
        factory = bluesky_source_factory(Settings())
        with pytest.raises(SourceUnavailableError, match="BSKY_HANDLE"):
            factory()

    @pytest.mark.asyncio
    async def test_builds_client(self):
        factory = bluesky_source_factory(
            Settings(bsky_handle="bot.test", bsky_app_password="app-pass")
        )
        client = factory()
        try:
            assert isinstance(client, BlueskyDmClient)
        finally:
            await client.close()

"""Tests for ConfigStore and configuration helpers."""

import json

import pytest

from autoreply.models import DEFAULT_WELCOME, BotConfig
from autoreply.storage import (
    CONFIG_KEY,
    ConfigValidationError,
    clamp_delay,
    normalize_welcome,
    validate_password,
    validate_send_cap,
)


class TestClampDelay:
    """Tests for clamp_delay()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1000, 300),
            (-5, 0),
            (0, 0),
            (300, 300),
            (42, 42),
            (2.5, 3),
            (2.4, 2),
            ("17", 17),
            ("abc", 0),
            (None, 0),
            (float("nan"), 0),
            (float("inf"), 0),
        ],
    )
    def test_clamp(self, value, expected):
        assert clamp_delay(value) == expected


class TestValidation:
    """Tests for boundary validation helpers."""

    def test_short_password_rejected(self):
        with pytest.raises(ConfigValidationError, match="at least 8"):
            validate_password("short")

    def test_password_is_stripped(self):
        assert validate_password("  longenough  ") == "longenough"

    def test_whitespace_padding_does_not_count(self):
        with pytest.raises(ConfigValidationError):
            validate_password("   1234567   ")

    def test_send_cap_below_one_rejected(self):
        with pytest.raises(ConfigValidationError):
            validate_send_cap(0)

    def test_send_cap_none_allowed(self):
        assert validate_send_cap(None) is None
        assert validate_send_cap(5) == 5

    def test_normalize_welcome(self):
        assert normalize_welcome("  hello  ") == "hello"
        assert normalize_welcome("   ") == DEFAULT_WELCOME
        assert normalize_welcome(None) == DEFAULT_WELCOME


class TestConfigStoreLoad:
    """Tests for ConfigStore.load()."""

    async def test_defaults_when_missing(self, config_store):
        config = await config_store.load()
        assert config == BotConfig()
        assert config.welcome_message == DEFAULT_WELCOME
        assert config.enabled is False
        assert config.setup_complete is False
        assert config.per_cycle_send_cap is None

    async def test_missing_fields_filled_at_load(self, config_store, storage):
        await storage.put(
            CONFIG_KEY,
            json.dumps({"welcome_message": "Hey", "enabled": True, "setup_complete": True}),
        )
        config = await config_store.load()
        assert config.welcome_message == "Hey"
        assert config.enabled is True
        assert config.message_delay_seconds == 0
        assert config.per_cycle_send_cap is None

    async def test_stored_delay_is_clamped(self, config_store, storage):
        await storage.put(CONFIG_KEY, json.dumps({"message_delay_seconds": 1000}))
        config = await config_store.load()
        assert config.message_delay_seconds == 300

    async def test_save_roundtrip(self, config_store):
        config = BotConfig(
            welcome_message="Thanks!",
            enabled=True,
            message_delay_seconds=30,
            per_cycle_send_cap=5,
            admin_password_hash="abc",
            setup_complete=True,
        )
        await config_store.save(config)
        assert await config_store.load() == config


class TestConfigStoreSnapshot:
    """Tests for ConfigStore.snapshot()."""

    async def test_snapshot_reflects_saved_config(self, config_store):
        await config_store.save(
            BotConfig(welcome_message="Hi", enabled=True, message_delay_seconds=10, per_cycle_send_cap=3)
        )
        snap = await config_store.snapshot()
        assert snap.enabled is True
        assert snap.reply_text == "Hi"
        assert snap.delay_seconds == 10
        assert snap.per_cycle_send_cap == 3

    async def test_snapshot_is_isolated_from_later_saves(self, config_store):
        await config_store.save(BotConfig(welcome_message="first", enabled=True))
        snap = await config_store.snapshot()

        await config_store.save(BotConfig(welcome_message="second", enabled=False))

        assert snap.reply_text == "first"
        assert snap.enabled is True

    async def test_blank_welcome_snapshots_to_default(self):
        assert BotConfig(welcome_message="  ").snapshot().reply_text == DEFAULT_WELCOME

    async def test_snapshot_is_frozen(self, config_store):
        snap = await config_store.snapshot()
        with pytest.raises(Exception):
            snap.enabled = True  # type: ignore[misc]


class TestConfigStoreSetup:
    """Tests for ConfigStore.complete_setup()."""

    async def test_first_setup_succeeds(self, config_store):
        created = await config_store.complete_setup(BotConfig(admin_password_hash="h"))
        assert created is True
        loaded = await config_store.load()
        assert loaded.setup_complete is True
        assert loaded.admin_password_hash == "h"

    async def test_second_setup_is_noop(self, config_store):
        await config_store.complete_setup(BotConfig(admin_password_hash="first"))
        created = await config_store.complete_setup(BotConfig(admin_password_hash="second"))
        assert created is False
        assert (await config_store.load()).admin_password_hash == "first"

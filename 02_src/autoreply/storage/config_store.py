"""Operator configuration persisted under the ``config`` key."""

import json
import math
from dataclasses import asdict
from typing import Any

from ..logging_config import get_logger
from ..models import DEFAULT_WELCOME, MAX_DELAY_SECONDS, BotConfig, DispatchConfig
from .storage import IStorage

logger = get_logger(__name__)

CONFIG_KEY = "config"
MIN_PASSWORD_LENGTH = 8


class ConfigValidationError(ValueError):
    """Operator input rejected at the admin boundary."""


def clamp_delay(value: Any) -> int:
    """Round to whole seconds and clamp to [0, MAX_DELAY_SECONDS].

    Anything that is not a finite number becomes 0.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    # Half-up rounding: 2.5 -> 3
    return min(MAX_DELAY_SECONDS, max(0, math.floor(number + 0.5)))


def normalize_welcome(text: str | None) -> str:
    """Strip the welcome text; blank falls back to the default."""
    return (text or "").strip() or DEFAULT_WELCOME


def validate_password(password: str) -> str:
    password = (password or "").strip()
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ConfigValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    return password


def validate_send_cap(cap: int | None) -> int | None:
    if cap is None:
        return None
    if cap < 1:
        raise ConfigValidationError("Per-cycle send cap must be at least 1")
    return cap


def _from_record(raw: str) -> BotConfig:
    data = json.loads(raw)
    defaults = BotConfig()
    cap = data.get("per_cycle_send_cap")
    return BotConfig(
        welcome_message=data.get("welcome_message") or defaults.welcome_message,
        enabled=bool(data.get("enabled", defaults.enabled)),
        message_delay_seconds=clamp_delay(data.get("message_delay_seconds", 0)),
        per_cycle_send_cap=int(cap) if cap is not None else None,
        admin_password_hash=data.get("admin_password_hash"),
        setup_complete=bool(data.get("setup_complete", defaults.setup_complete)),
    )


class ConfigStore:
    """Loads and saves BotConfig, filling defaults at load time."""

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def load(self) -> BotConfig:
        """Load the configuration, or defaults if none was saved."""
        raw = await self._storage.get(CONFIG_KEY)
        if not raw:
            return BotConfig()
        return _from_record(raw)

    async def save(self, config: BotConfig) -> None:
        """Persist the configuration."""
        await self._storage.put(CONFIG_KEY, json.dumps(asdict(config)))

    async def complete_setup(self, config: BotConfig) -> bool:
        """Write the first configuration. False if setup already happened."""
        config.setup_complete = True
        created = await self._storage.put_if_absent(
            CONFIG_KEY, json.dumps(asdict(config))
        )
        if created:
            logger.info("Initial setup completed")
        return created

    async def snapshot(self) -> DispatchConfig:
        """Read-once view used for a single dispatch cycle."""
        config = await self.load()
        return config.snapshot()

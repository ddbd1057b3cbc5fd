"""Dispatch configuration and cycle result models."""

from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_WELCOME = "Hi! Thanks for reaching out. How can I help you today?"
MAX_DELAY_SECONDS = 300


@dataclass(frozen=True)
class DispatchConfig:
    """Operator settings, read once at the start of a cycle."""

    enabled: bool
    reply_text: str
    delay_seconds: int = 0
    per_cycle_send_cap: int | None = None


@dataclass
class BotConfig:
    """Persisted operator configuration plus admin auth fields."""

    welcome_message: str = DEFAULT_WELCOME
    enabled: bool = False
    message_delay_seconds: int = 0
    per_cycle_send_cap: int | None = None
    admin_password_hash: str | None = None
    setup_complete: bool = False

    def snapshot(self) -> DispatchConfig:
        """Freeze the dispatch-relevant part of the configuration."""
        return DispatchConfig(
            enabled=self.enabled,
            reply_text=self.welcome_message.strip() or DEFAULT_WELCOME,
            delay_seconds=min(MAX_DELAY_SECONDS, max(0, self.message_delay_seconds)),
            per_cycle_send_cap=self.per_cycle_send_cap,
        )


@dataclass
class CycleReport:
    """Outcome of one dispatch cycle."""

    sent_count: int = 0
    conversations_seen: int = 0
    pages_fetched: int = 0
    failed_sends: int = 0
    cap_reached: bool = False
    started_at: datetime | None = None
    finished_at: datetime | None = None
    notified: list[str] = field(default_factory=list)  # correspondent dids

"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "autoreply.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_SERVICE_URL = "https://bsky.social"
DEFAULT_CYCLE_CRON = "* * * * *"
DEFAULT_PAGE_SIZE = 50


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Process settings read from the environment."""

    bsky_handle: str | None = None
    bsky_app_password: str | None = None
    bsky_service_url: str = DEFAULT_SERVICE_URL
    admin_session_secret: str | None = None
    webhook_base_url: str | None = None
    database_url: str | None = None
    cycle_cron: str = DEFAULT_CYCLE_CRON
    scheduler_enabled: bool = True
    conversation_source: str = "bluesky"
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            bsky_handle=os.getenv("BSKY_HANDLE") or None,
            bsky_app_password=os.getenv("BSKY_APP_PASSWORD") or None,
            bsky_service_url=os.getenv("BSKY_SERVICE_URL") or DEFAULT_SERVICE_URL,
            admin_session_secret=os.getenv("ADMIN_SESSION_SECRET") or None,
            webhook_base_url=os.getenv("WEBHOOK_BASE_URL") or None,
            database_url=os.getenv("DATABASE_URL") or None,
            cycle_cron=os.getenv("CYCLE_CRON") or DEFAULT_CYCLE_CRON,
            scheduler_enabled=_env_flag("SCHEDULER_ENABLED", True),
            conversation_source=(os.getenv("CONVERSATION_SOURCE") or "bluesky").lower(),
            page_size=int(os.getenv("PAGE_SIZE", str(DEFAULT_PAGE_SIZE))),
        )

"""Storage module."""

from .config_store import (
    CONFIG_KEY,
    ConfigStore,
    ConfigValidationError,
    clamp_delay,
    normalize_welcome,
    validate_password,
    validate_send_cap,
)
from .storage import IStorage, Storage

__all__ = [
    "IStorage",
    "Storage",
    "CONFIG_KEY",
    "ConfigStore",
    "ConfigValidationError",
    "clamp_delay",
    "normalize_welcome",
    "validate_password",
    "validate_send_cap",
]

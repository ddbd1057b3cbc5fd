"""Admin area state machine."""

from enum import Enum

from ..models import BotConfig
from .session import verify_session


class AdminState(str, Enum):
    """UNCONFIGURED -> LOGGED_OUT <-> LOGGED_IN."""

    UNCONFIGURED = "unconfigured"
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"


def resolve_admin_state(
    config: BotConfig, token: str | None, secret: str | None
) -> AdminState:
    """Derive the admin state from stored config and the request's session."""
    if not config.setup_complete:
        return AdminState.UNCONFIGURED
    if secret and verify_session(token, secret):
        return AdminState.LOGGED_IN
    return AdminState.LOGGED_OUT

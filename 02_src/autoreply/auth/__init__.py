"""Admin authentication module."""

from .session import (
    SESSION_COOKIE_NAME,
    SESSION_TTL,
    hash_password,
    issue_session,
    verify_password,
    verify_session,
)
from .state import AdminState, resolve_admin_state

__all__ = [
    "SESSION_COOKIE_NAME",
    "SESSION_TTL",
    "hash_password",
    "issue_session",
    "verify_password",
    "verify_session",
    "AdminState",
    "resolve_admin_state",
]

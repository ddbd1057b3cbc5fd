"""Signed admin session tokens and password hashing.

A token is ``<payload>.<signature>``: the payload is base64url JSON
``{"exp": <unix seconds>}`` and the signature is HMAC-SHA256 over the raw
payload JSON, keyed with the operator secret.
"""

import base64
import hashlib
import hmac
import json
import time
from datetime import timedelta

SESSION_COOKIE_NAME = "admin_session"
SESSION_TTL = timedelta(days=7)


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(data: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), data, hashlib.sha256).digest()


def issue_session(
    secret: str, now: float | None = None, ttl: timedelta = SESSION_TTL
) -> str:
    """Create a session token that expires ``ttl`` from ``now``."""
    issued_at = time.time() if now is None else now
    payload = json.dumps({"exp": int(issued_at + ttl.total_seconds())}).encode("utf-8")
    return f"{_b64encode(payload)}.{_b64encode(_sign(payload, secret))}"


def verify_session(token: str | None, secret: str, now: float | None = None) -> bool:
    """Check signature and expiry.

    Every failure (malformed, forged, expired) returns False without saying
    which one happened.
    """
    if not token or not secret:
        return False
    try:
        payload_b64, sig_b64 = token.split(".")
        payload = _b64decode(payload_b64)
        signature = _b64decode(sig_b64)
        if not hmac.compare_digest(signature, _sign(payload, secret)):
            return False
        exp = json.loads(payload)["exp"]
        current = time.time() if now is None else now
        return isinstance(exp, (int, float)) and exp >= current
    except (ValueError, KeyError, TypeError):
        return False


def hash_password(password: str) -> str:
    """Hex SHA-256 digest of the password."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str | None) -> bool:
    """Compare a candidate password against the stored hash."""
    if not password_hash:
        return False
    return hmac.compare_digest(hash_password(password), password_hash)

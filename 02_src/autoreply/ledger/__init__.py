"""Ledger module."""

from .ledger import NOTIFIED_PREFIX, NOTIFIED_TTL, CorrespondentLedger, ICorrespondentLedger

__all__ = [
    "CorrespondentLedger",
    "ICorrespondentLedger",
    "NOTIFIED_PREFIX",
    "NOTIFIED_TTL",
]

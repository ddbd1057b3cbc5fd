"""Conversation source module."""

from .base import IConversationSource, SourceUnavailableError
from .bluesky import BlueskyDmClient
from .text import DM_MAX_GRAPHEMES, grapheme_length, truncate_graphemes

__all__ = [
    "IConversationSource",
    "SourceUnavailableError",
    "BlueskyDmClient",
    "DM_MAX_GRAPHEMES",
    "grapheme_length",
    "truncate_graphemes",
]

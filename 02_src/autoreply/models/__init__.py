"""Core data models for the auto-reply service."""

from .conversations import Conversation, ConversationPage, LastMessage, Participant
from .dispatch import (
    DEFAULT_WELCOME,
    MAX_DELAY_SECONDS,
    BotConfig,
    CycleReport,
    DispatchConfig,
)

__all__ = [
    # Conversations
    "Participant",
    "LastMessage",
    "Conversation",
    "ConversationPage",
    # Dispatch
    "BotConfig",
    "DispatchConfig",
    "CycleReport",
    "DEFAULT_WELCOME",
    "MAX_DELAY_SECONDS",
]

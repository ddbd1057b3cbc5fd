"""Auto-reply service: greets first-time DM correspondents exactly once."""

from .app import Application, IApplication
from .auth import AdminState, issue_session, verify_session
from .config import Settings
from .dispatch import CycleRunner, DispatchEngine, IDispatchEngine
from .ledger import CorrespondentLedger, ICorrespondentLedger
from .models import (
    BotConfig,
    Conversation,
    ConversationPage,
    CycleReport,
    DispatchConfig,
    LastMessage,
    Participant,
)
from .scheduler import CycleScheduler
from .source import BlueskyDmClient, IConversationSource, SourceUnavailableError
from .storage import ConfigStore, IStorage, Storage

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "Participant",
    "LastMessage",
    "Conversation",
    "ConversationPage",
    "BotConfig",
    "DispatchConfig",
    "CycleReport",
    # Components
    "IStorage",
    "Storage",
    "ConfigStore",
    "ICorrespondentLedger",
    "CorrespondentLedger",
    "IConversationSource",
    "BlueskyDmClient",
    "SourceUnavailableError",
    "IDispatchEngine",
    "DispatchEngine",
    "CycleRunner",
    "CycleScheduler",
    # Auth
    "AdminState",
    "issue_session",
    "verify_session",
]

"""SIM module."""

from .sim import SCENARIO_USERS, SIM_BOT_DID, SentMessage, SimConversationSource

__all__ = ["SCENARIO_USERS", "SIM_BOT_DID", "SentMessage", "SimConversationSource"]

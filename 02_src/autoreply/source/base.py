"""Conversation source interface."""

from typing import Protocol

from ..models import ConversationPage


class SourceUnavailableError(RuntimeError):
    """Login or listing against the conversation source failed."""


class IConversationSource(Protocol):
    """Paginated conversation listing plus message sending."""

    max_message_length: int  # in grapheme clusters

    @property
    def account_did(self) -> str:
        """Identifier of the bot's own account. Available after login()."""
        ...

    async def login(self) -> None:
        """Authenticate. Raises SourceUnavailableError on failure."""
        ...

    async def list_conversations(
        self, limit: int, cursor: str | None = None
    ) -> ConversationPage:
        """Fetch one page. Raises SourceUnavailableError on failure."""
        ...

    async def send_message(self, conversation_id: str, text: str) -> bool:
        """Send text into a conversation. False on failure."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...

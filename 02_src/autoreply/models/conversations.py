"""Conversation-related data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Participant:
    """A member of a conversation (the bot account included)."""

    did: str
    handle: str | None = None


@dataclass
class LastMessage:
    """Most recent message of a conversation."""

    id: str
    text: str
    sent_at: datetime | None
    sender_did: str


@dataclass
class Conversation:
    """A conversation as listed by the conversation source."""

    id: str
    members: list[Participant] = field(default_factory=list)
    last_message: LastMessage | None = None

    def other_participant(self, own_did: str) -> str | None:
        """Return the sole participant that is not us, or None."""
        others = {m.did for m in self.members if m.did and m.did != own_did}
        if len(others) != 1:
            return None
        return others.pop()

    def is_last_message_from(self, did: str) -> bool:
        """Check whether the last message was sent by ``did``."""
        return self.last_message is not None and self.last_message.sender_did == did


@dataclass
class ConversationPage:
    """One page of a cursor-paginated conversation listing."""

    conversations: list[Conversation]
    cursor: str | None = None  # absent on the last page

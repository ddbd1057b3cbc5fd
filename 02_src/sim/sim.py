"""SIM implementation - in-memory conversation source for local runs and tests."""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from autoreply.logging_config import get_logger
from autoreply.models import Conversation, ConversationPage, LastMessage, Participant
from autoreply.source import DM_MAX_GRAPHEMES, SourceUnavailableError

logger = get_logger(__name__)

SIM_BOT_DID = "did:plc:sim-bot"

# Hardcoded scenario: three virtual users who just wrote in.
SCENARIO_USERS = [
    ("did:plc:alice", "alice.test", "Hi! Is this account still active?"),
    ("did:plc:bob", "bob.test", "Hello, quick question about your project"),
    ("did:plc:charlie", "charlie.test", "Hey there"),
]


@dataclass
class SentMessage:
    """A message the bot sent through the simulator."""

    conversation_id: str
    recipient_did: str
    text: str
    sent_at: datetime


class SimConversationSource:
    """Conversation source backed by an in-memory, ordered conversation list."""

    max_message_length = DM_MAX_GRAPHEMES

    def __init__(self, account_did: str = SIM_BOT_DID, seed_scenario: bool = False):
        self._account_did = account_did
        self._conversations: dict[str, Conversation] = {}
        self.sent: list[SentMessage] = []
        self.failing_conversations: set[str] = set()
        self.fail_listing = False
        self.fail_login = False
        self.logged_in = False
        self.closed = False
        self.list_calls = 0

        if seed_scenario:
            for did, handle, text in SCENARIO_USERS:
                convo_id = self.add_conversation(did, handle=handle)
                self.receive(convo_id, did, text)

    @property
    def account_did(self) -> str:
        return self._account_did

    def add_conversation(
        self,
        correspondent_did: str,
        conversation_id: str | None = None,
        handle: str | None = None,
        extra_members: list[str] | None = None,
    ) -> str:
        """Open a conversation between the bot and a correspondent."""
        convo_id = conversation_id or f"convo-{uuid.uuid4().hex[:8]}"
        members = [Participant(did=self._account_did)]
        if correspondent_did:
            members.append(Participant(did=correspondent_did, handle=handle))
        members.extend(Participant(did=did) for did in extra_members or [])
        self._conversations[convo_id] = Conversation(id=convo_id, members=members)
        return convo_id

    def receive(self, conversation_id: str, sender_did: str, text: str) -> None:
        """Make ``sender_did`` the author of the conversation's last message."""
        self._conversations[conversation_id].last_message = LastMessage(
            id=str(uuid.uuid4()),
            text=text,
            sent_at=datetime.now(timezone.utc),
            sender_did=sender_did,
        )

    def sent_to(self, did: str) -> list[SentMessage]:
        """Messages the bot sent to one correspondent."""
        return [m for m in self.sent if m.recipient_did == did]

    async def login(self) -> None:
        if self.fail_login:
            raise SourceUnavailableError("SIM: login refused")
        self.logged_in = True

    async def list_conversations(
        self, limit: int = 50, cursor: str | None = None
    ) -> ConversationPage:
        """Offset-based pages; the cursor is the next offset as a string."""
        self.list_calls += 1
        if self.fail_listing:
            raise SourceUnavailableError("SIM: listing unavailable")

        start = int(cursor) if cursor else 0
        items = list(self._conversations.values())
        page = items[start:start + limit]
        next_offset = start + limit
        return ConversationPage(
            conversations=page,
            cursor=str(next_offset) if next_offset < len(items) else None,
        )

    async def send_message(self, conversation_id: str, text: str) -> bool:
        if conversation_id in self.failing_conversations:
            logger.warning("SIM: send to %s failed", conversation_id)
            return False

        convo = self._conversations.get(conversation_id)
        if convo is None:
            return False

        recipient = convo.other_participant(self._account_did) or ""
        self.sent.append(
            SentMessage(
                conversation_id=conversation_id,
                recipient_did=recipient,
                text=text,
                sent_at=datetime.now(timezone.utc),
            )
        )
        self.receive(conversation_id, self._account_did, text)
        logger.info("SIM: replied to %s", recipient)
        return True

    async def close(self) -> None:
        self.closed = True

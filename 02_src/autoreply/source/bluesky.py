"""Bluesky chat client for listing conversations and sending messages.

Uses the chat.bsky.convo XRPC methods through the account's PDS, which
proxies them to the chat service.
"""

from datetime import datetime
from typing import Any

import httpx

from ..config import DEFAULT_SERVICE_URL
from ..logging_config import get_logger
from ..models import Conversation, ConversationPage, LastMessage, Participant
from .base import SourceUnavailableError
from .text import DM_MAX_GRAPHEMES, truncate_graphemes

logger = get_logger(__name__)

CHAT_PROXY_HEADER = "did:web:api.bsky.chat#bsky_chat"


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _parse_convo(data: dict[str, Any]) -> Conversation:
    members = [
        Participant(did=m["did"], handle=m.get("handle"))
        for m in data.get("members") or []
        if m.get("did")
    ]

    last_message = None
    last = data.get("lastMessage")
    sender = (last or {}).get("sender") or {}
    if last and sender.get("did"):
        last_message = LastMessage(
            id=last.get("id", ""),
            text=last.get("text", ""),
            sent_at=_parse_timestamp(last.get("sentAt")),
            sender_did=sender["did"],
        )

    return Conversation(id=data["id"], members=members, last_message=last_message)


class BlueskyDmClient:
    """Bluesky DM client."""

    max_message_length = DM_MAX_GRAPHEMES

    def __init__(
        self,
        handle: str,
        app_password: str,
        service_url: str = DEFAULT_SERVICE_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._handle = handle
        self._app_password = app_password
        self._service_url = service_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._access_jwt: str | None = None
        self._did: str | None = None

    async def __aenter__(self) -> "BlueskyDmClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def account_did(self) -> str:
        """DID of the logged-in account."""
        if not self._did:
            raise RuntimeError("Not logged in")
        return self._did

    def _headers(self) -> dict[str, str]:
        if not self._access_jwt:
            raise RuntimeError("Not logged in")
        return {
            "Authorization": f"Bearer {self._access_jwt}",
            "atproto-proxy": CHAT_PROXY_HEADER,
        }

    async def login(self) -> None:
        """Create a session with the app password."""
        try:
            response = await self._client.post(
                f"{self._service_url}/xrpc/com.atproto.server.createSession",
                json={"identifier": self._handle, "password": self._app_password},
            )
        except httpx.HTTPError as e:
            raise SourceUnavailableError(f"Bluesky login failed: {e}") from e

        if response.status_code != 200:
            raise SourceUnavailableError(
                f"Bluesky login failed: {response.status_code} {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SourceUnavailableError(f"Bluesky login returned invalid JSON: {e}") from e
        self._access_jwt = data.get("accessJwt")
        self._did = data.get("did")
        if not self._access_jwt or not self._did:
            raise SourceUnavailableError("Bluesky login returned no session")
        logger.debug("Logged in to Bluesky as %s", self._did)

    async def list_conversations(
        self, limit: int = 50, cursor: str | None = None
    ) -> ConversationPage:
        """List one page of conversations."""
        params: dict[str, Any] = {"limit": limit}
        if cursor:
            params["cursor"] = cursor

        try:
            response = await self._client.get(
                f"{self._service_url}/xrpc/chat.bsky.convo.listConvos",
                params=params,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise SourceUnavailableError(f"listConvos failed: {e}") from e

        if response.status_code != 200:
            raise SourceUnavailableError(
                f"listConvos failed: {response.status_code} {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SourceUnavailableError(f"listConvos returned invalid JSON: {e}") from e

        return ConversationPage(
            conversations=[
                _parse_convo(c) for c in data.get("convos") or [] if c.get("id")
            ],
            cursor=data.get("cursor") or None,
        )

    async def send_message(self, conversation_id: str, text: str) -> bool:
        """Send a DM in an existing conversation."""
        safe_text = truncate_graphemes(text.strip(), self.max_message_length)

        try:
            response = await self._client.post(
                f"{self._service_url}/xrpc/chat.bsky.convo.sendMessage",
                json={"convoId": conversation_id, "message": {"text": safe_text}},
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.warning("sendMessage to %s failed: %s", conversation_id, e)
            return False

        if response.status_code != 200:
            logger.warning(
                "sendMessage to %s failed: %s %s",
                conversation_id,
                response.status_code,
                response.text,
            )
            return False

        return True

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

"""Conversation data class holding the per-session message ledger."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import uuid4

from support_chat.conf.config import Config
from support_chat.src.data_classes.chat_message import (
    ChatMessage,
    MessageRole,
    utc_timestamp,
)


def derive_title(
    text: str,
    max_length: int = Config.TITLE_MAX_LENGTH,
    ellipsis: str = Config.TITLE_ELLIPSIS,
) -> str:
    """Shorten a message into a conversation title.

    Args:
        text: The message to derive the title from
        max_length: Maximum number of characters kept from the message
        ellipsis: Marker appended when the message was cut

    Returns:
        The full message, or its first max_length characters plus the marker
    """
    if len(text) > max_length:
        return text[:max_length] + ellipsis
    return text


@dataclass
class Conversation:
    """An append-only message history keyed by (user_id, session_id).

    Messages are stored in insertion order, which is chronological order.
    The title is assigned once, when the first exchange completes.

    Attributes:
        user_id: Owner of the conversation
        session_id: Caller-supplied session identifier
        messages: Ordered message history
        title: Title derived from the first user message
        id: Unique identifier
        created_at: Creation time (ISO-8601, UTC)
        updated_at: Time of the last appended message (ISO-8601, UTC)
    """

    user_id: str
    session_id: str
    messages: List[ChatMessage] = field(default_factory=list)
    title: Optional[str] = None
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: str = field(default_factory=utc_timestamp)
    updated_at: str = field(default_factory=utc_timestamp)

    @property
    def key(self) -> tuple:
        return (self.user_id, self.session_id)

    def append(self, message: ChatMessage) -> None:
        """Append a message to the end of the history."""
        self.messages.append(message)
        self.updated_at = message.timestamp

    def assign_title(
        self,
        max_length: int = Config.TITLE_MAX_LENGTH,
        ellipsis: str = Config.TITLE_ELLIPSIS,
    ) -> bool:
        """Set the title from the first user message after the first exchange.

        Only applies when the history holds exactly two messages (the first
        user message and the first assistant reply).

        Returns:
            True if a title was assigned
        """
        if len(self.messages) != 2:
            return False
        first_user = next(
            (m for m in self.messages if m.role == MessageRole.USER), None
        )
        if first_user is None:
            return False
        self.title = derive_title(first_user.content, max_length, ellipsis)
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert the conversation to its JSON representation."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "sessionId": self.session_id,
            "title": self.title,
            "messages": [message.to_dict() for message in self.messages],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Conversation":
        return cls(
            id=data["id"],
            user_id=data["userId"],
            session_id=data["sessionId"],
            title=data.get("title"),
            messages=[ChatMessage.from_dict(m) for m in data.get("messages", [])],
            created_at=data.get("createdAt") or utc_timestamp(),
            updated_at=data.get("updatedAt") or utc_timestamp(),
        )

"""Chat message data class and role enumeration."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class MessageRole(str, Enum):
    """Roles understood by the completion API."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """A single message in a conversation.

    Attributes:
        role: Who authored the message
        content: Message text
        timestamp: When the message was created (ISO-8601, UTC)
    """

    role: MessageRole
    content: str
    timestamp: str = field(default_factory=utc_timestamp)

    def to_prompt(self) -> Dict[str, str]:
        """Convert to the role/content pair sent to the completion API."""
        return {"role": self.role.value, "content": self.content}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "content": self.content,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatMessage":
        return cls(
            role=MessageRole(data["role"]),
            content=data["content"],
            timestamp=data.get("timestamp") or utc_timestamp(),
        )

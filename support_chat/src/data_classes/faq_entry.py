"""FAQ entry data class representing a single knowledge-base question/answer pair."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List
from uuid import uuid4

from support_chat.conf.config import Config
from support_chat.src.data_classes.chat_message import utc_timestamp


def normalize_keywords(
    keywords: Iterable[str], max_keywords: int = Config.MAX_KEYWORDS
) -> List[str]:
    """Lower-case, deduplicate and cap a keyword list, keeping first-seen order.

    Args:
        keywords: Raw keywords, possibly user supplied
        max_keywords: Maximum number of keywords to keep

    Returns:
        Normalized keyword list
    """
    normalized: List[str] = []
    for keyword in keywords:
        keyword = str(keyword).strip().lower()
        if keyword and keyword not in normalized:
            normalized.append(keyword)
        if len(normalized) >= max_keywords:
            break
    return normalized


@dataclass
class FAQEntry:
    """A stored FAQ entry with its matching metadata.

    Attributes:
        question: The question text
        answer: The answer text
        category: Free-form category label
        keywords: Lower-case keywords, unique and capped at Config.MAX_KEYWORDS
        priority: Ranking priority in [Config.MIN_PRIORITY, Config.MAX_PRIORITY]
        is_active: Inactive entries are never offered to the matcher
        id: Unique identifier
        created_at: Creation time (ISO-8601, UTC)
        updated_at: Last modification time (ISO-8601, UTC)
    """

    question: str
    answer: str
    category: str = Config.DEFAULT_CATEGORY
    keywords: List[str] = field(default_factory=list)
    priority: int = Config.DEFAULT_PRIORITY
    is_active: bool = True
    id: str = field(default_factory=lambda: uuid4().hex)
    created_at: str = field(default_factory=utc_timestamp)
    updated_at: str = field(default_factory=utc_timestamp)

    def __post_init__(self) -> None:
        if not Config.MIN_PRIORITY <= self.priority <= Config.MAX_PRIORITY:
            raise ValueError(
                f"Priority must be between {Config.MIN_PRIORITY} and "
                f"{Config.MAX_PRIORITY}, got {self.priority}"
            )
        self.keywords = normalize_keywords(self.keywords)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to its JSON representation."""
        return {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "category": self.category,
            "keywords": list(self.keywords),
            "priority": self.priority,
            "isActive": self.is_active,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FAQEntry":
        """Create an FAQEntry from its JSON representation.

        Args:
            data: Dictionary produced by to_dict
        """
        return cls(
            id=data["id"],
            question=data["question"],
            answer=data["answer"],
            category=data.get("category", Config.DEFAULT_CATEGORY),
            keywords=data.get("keywords", []),
            priority=data.get("priority", Config.DEFAULT_PRIORITY),
            is_active=data.get("isActive", True),
            created_at=data.get("createdAt") or utc_timestamp(),
            updated_at=data.get("updatedAt") or utc_timestamp(),
        )

"""Storage services package.

This package provides storage-related services including:
- FAQStore: JSON-based storage for FAQ entries
- ConversationStore: JSON-based ledger of per-session conversations

The services handle data persistence and retrieval with thread-safe
concurrent access.
"""

from .conversation_store import ConversationStore
from .faq_store import FAQStore
from .json_store import JsonFileStore

__all__ = ["ConversationStore", "FAQStore", "JsonFileStore"]

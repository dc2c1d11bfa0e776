"""Data classes module for the support chat domain.

Classes:
    - FAQEntry: A knowledge-base question/answer pair with matching metadata
    - ChatMessage: A single role-tagged message
    - Conversation: The append-only message ledger of one session
Types:
    - MessageRole: Enumeration of message authors

The classes in this module form the foundation for matching, context assembly
and persistence throughout the application.
"""

from support_chat.src.data_classes.chat_message import (
    ChatMessage,
    MessageRole,
    utc_timestamp,
)
from support_chat.src.data_classes.conversation import Conversation, derive_title
from support_chat.src.data_classes.faq_entry import FAQEntry, normalize_keywords

__all__ = [
    "MessageRole",
    "ChatMessage",
    "Conversation",
    "FAQEntry",
    "derive_title",
    "normalize_keywords",
    "utc_timestamp",
]

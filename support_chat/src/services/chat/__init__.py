"""Chat services package.

Components:
- ContextAssembler: builds the message list sent to the completion API
- ConversationExchange: enforces the order of steps within one exchange
- SessionLockRegistry: serializes exchanges per (user_id, session_id)
- ChatService: orchestrates matching, context assembly, completion and persistence
"""

from .chat_service import ChatResult, ChatService
from .context_assembler import ContextAssembler
from .exchange import ConversationExchange, ExchangeState, InvalidExchangeTransition
from .session_locks import SessionLockRegistry

__all__ = [
    "ChatResult",
    "ChatService",
    "ContextAssembler",
    "ConversationExchange",
    "ExchangeState",
    "InvalidExchangeTransition",
    "SessionLockRegistry",
]

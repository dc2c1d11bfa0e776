"""Services package for backend functionality.

This package contains all service components for business logic.
"""

from .chat import ChatResult, ChatService
from .factory import (
    create_chat_service,
    create_conversation_store,
    create_faq_matcher,
    create_faq_service,
    create_faq_store,
    create_keyword_extractor,
    create_llm_service,
)
from .faq import FAQMatcher, FAQService
from .llm import BaseLLMService, CompletionError, OpenRouterLLMService
from .store import ConversationStore, FAQStore

__all__ = [
    # LLM Services
    "BaseLLMService",
    "CompletionError",
    "OpenRouterLLMService",
    # Other Services
    "ChatResult",
    "ChatService",
    "FAQMatcher",
    "FAQService",
    "ConversationStore",
    "FAQStore",
    # Factory Functions
    "create_llm_service",
    "create_faq_store",
    "create_conversation_store",
    "create_keyword_extractor",
    "create_faq_matcher",
    "create_faq_service",
    "create_chat_service",
]

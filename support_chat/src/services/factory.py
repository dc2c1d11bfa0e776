"""Service factory module for centralized service instantiation.

This module provides factory methods for creating service instances,
keeping service initialization logic in one place. Configuration values are
read here and passed to constructors, so the services themselves never consult
Config at call time.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from support_chat.conf.config import Config
from support_chat.src.services.chat import (
    ChatService,
    ContextAssembler,
    SessionLockRegistry,
)
from support_chat.src.services.faq import (
    FAQMatcher,
    FAQService,
    FAQTextParser,
    KeywordExtractor,
)
from support_chat.src.services.llm import BaseLLMService, OpenRouterLLMService
from support_chat.src.services.store import ConversationStore, FAQStore

logger = logging.getLogger(__name__)


def create_llm_service(model_name: Optional[str] = None) -> BaseLLMService:
    """Create the completion service.

    Args:
        model_name: Model identifier, defaults to Config.LLM_MODEL_NAME

    Returns:
        Initialized LLM service

    Raises:
        ValueError: If no OpenRouter API key is configured
    """
    try:
        return OpenRouterLLMService(
            api_key=Config.OPENROUTER_API_KEY,
            base_url=Config.OPENROUTER_BASE_URL,
            model_name=model_name or Config.LLM_MODEL_NAME,
            max_tokens=Config.LLM_MAX_TOKENS,
            temperature=Config.LLM_TEMPERATURE,
            referer=Config.FRONTEND_URL,
            app_title=Config.APP_TITLE,
            timeout=Config.LLM_REQUEST_TIMEOUT,
            max_retries=Config.LLM_MAX_RETRIES,
        )
    except Exception as e:
        logger.error(f"Failed to create OpenRouter LLM service: {e}")
        raise


def create_faq_store(path: Optional[Union[str, Path]] = None) -> FAQStore:
    """Create the FAQ store, defaulting to Config.FAQ_STORE_PATH."""
    return FAQStore(path or Config.FAQ_STORE_PATH)


def create_conversation_store(
    path: Optional[Union[str, Path]] = None,
) -> ConversationStore:
    """Create the conversation ledger, defaulting to Config.CONVERSATION_STORE_PATH."""
    return ConversationStore(path or Config.CONVERSATION_STORE_PATH)


def create_keyword_extractor() -> KeywordExtractor:
    return KeywordExtractor(
        stop_words=Config.STOP_WORDS,
        min_length=Config.MIN_KEYWORD_LENGTH,
        max_keywords=Config.MAX_KEYWORDS,
    )


def create_faq_matcher(faq_store: FAQStore) -> FAQMatcher:
    return FAQMatcher(faq_store=faq_store, candidate_limit=Config.FAQ_CANDIDATE_LIMIT)


def create_faq_service(faq_store: FAQStore) -> FAQService:
    """Create the FAQ management and ingestion service.

    Args:
        faq_store: Store the service writes to

    Returns:
        Configured FAQService instance
    """
    return FAQService(
        faq_store=faq_store,
        keyword_extractor=create_keyword_extractor(),
        parser=FAQTextParser(),
        default_category=Config.DEFAULT_CATEGORY,
        upload_category=Config.UPLOAD_CATEGORY,
    )


def create_chat_service(
    llm_service: Optional[BaseLLMService],
    conversation_store: ConversationStore,
    faq_store: FAQStore,
) -> ChatService:
    """Create and configure a ChatService instance.

    Args:
        llm_service: Completion collaborator, if one is configured
        conversation_store: Conversation ledger
        faq_store: Source of FAQ entries for matching

    Returns:
        Configured ChatService instance
    """
    logger.info("Initializing ChatService with components")
    return ChatService(
        llm_service=llm_service,
        conversation_store=conversation_store,
        faq_matcher=create_faq_matcher(faq_store),
        context_assembler=ContextAssembler(window_size=Config.HISTORY_WINDOW),
        session_locks=SessionLockRegistry(),
        max_tokens=Config.LLM_MAX_TOKENS,
        temperature=Config.LLM_TEMPERATURE,
        title_max_length=Config.TITLE_MAX_LENGTH,
    )

"""Chat service orchestrating one support exchange.

For each incoming message the service:
1. Loads or creates the session's conversation and appends the user message
2. Looks up a relevant FAQ entry
3. Assembles the upstream context from the prompt, the FAQ and recent history
4. Calls the completion API
5. Appends the reply, titles new conversations and persists the result

Exchanges on the same (user_id, session_id) are serialized with a per-session
lock. If the completion call fails nothing is persisted, so the session is left
as it was before the exchange.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from support_chat.conf.config import Config
from support_chat.src.data_classes import Conversation
from support_chat.src.services.chat.context_assembler import ContextAssembler
from support_chat.src.services.chat.exchange import ConversationExchange
from support_chat.src.services.chat.session_locks import SessionLockRegistry
from support_chat.src.services.faq.faq_matcher import FAQMatcher
from support_chat.src.services.llm import BaseLLMService, CompletionError
from support_chat.src.services.store.conversation_store import ConversationStore

logger = logging.getLogger(__name__)


@dataclass
class ChatResult:
    """Result of one processed message.

    Attributes:
        response: The assistant reply text
        conversation_id: Identifier of the conversation the exchange belongs to
        timestamp: When the reply was received
        model: Model that produced the reply
        matched_faq_id: Identifier of the FAQ entry used as context, if any
    """

    response: str
    conversation_id: str
    timestamp: str
    model: str
    matched_faq_id: Optional[str] = None


class ChatService:
    """Runs chat exchanges against the completion API.

    Attributes:
        llm_service: Completion collaborator, None when no API key is configured
        conversation_store: Conversation ledger
        faq_matcher: Finds the FAQ entry relevant to a message
        context_assembler: Builds the upstream message list
        session_locks: Per-session locks
    """

    def __init__(
        self,
        llm_service: Optional[BaseLLMService],
        conversation_store: ConversationStore,
        faq_matcher: FAQMatcher,
        context_assembler: Optional[ContextAssembler] = None,
        session_locks: Optional[SessionLockRegistry] = None,
        max_tokens: int = Config.LLM_MAX_TOKENS,
        temperature: float = Config.LLM_TEMPERATURE,
        title_max_length: int = Config.TITLE_MAX_LENGTH,
    ) -> None:
        self.llm_service = llm_service
        self.conversation_store = conversation_store
        self.faq_matcher = faq_matcher
        self.context_assembler = context_assembler or ContextAssembler()
        self.session_locks = session_locks or SessionLockRegistry()
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.title_max_length = title_max_length

    def process_message(self, message: str, user_id: str, session_id: str) -> ChatResult:
        """Process a user message and return the assistant reply.

        Args:
            message: The user's message
            user_id: Identifier of the user
            session_id: Identifier of the user's session

        Returns:
            ChatResult with the reply and conversation details

        Raises:
            CompletionError: If the completion API fails or none is configured;
                nothing is persisted
        """
        if self.llm_service is None:
            raise CompletionError("No completion service configured")

        with self.session_locks.hold(user_id, session_id):
            conversation = self.conversation_store.find(user_id, session_id)
            if conversation is None:
                conversation = self.conversation_store.create(user_id, session_id)

            exchange = ConversationExchange(
                conversation,
                self.conversation_store,
                self.context_assembler,
                self.title_max_length,
            )
            exchange.append_user_message(message)

            matched_faq = self.faq_matcher.find_relevant(message)
            context = exchange.build_context(matched_faq)
            logger.info(
                f"Sending {len(context)} messages upstream for session {session_id} "
                f"(faq match: {matched_faq.id if matched_faq else None})"
            )

            reply = self.llm_service.complete(
                context,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                model=self.llm_service.model_name,
            )

            exchange.append_reply(reply)
            exchange.finish()
            self.conversation_store.save(conversation)

        return ChatResult(
            response=reply.content,
            conversation_id=conversation.id,
            timestamp=reply.timestamp,
            model=self.llm_service.model_name,
            matched_faq_id=matched_faq.id if matched_faq else None,
        )

    def get_history(
        self, user_id: str, page: int = 1, limit: int = Config.HISTORY_PAGE_SIZE
    ) -> List[Conversation]:
        return self.conversation_store.list_for_user(user_id, page=page, limit=limit)

    def get_conversation(self, user_id: str, session_id: str) -> Optional[Conversation]:
        return self.conversation_store.find(user_id, session_id)

"""State tracking for a single chat exchange on a conversation.

One exchange moves a conversation through::

    IDLE -> USER_MESSAGE_APPENDED -> CONTEXT_BUILT -> REPLY_APPENDED
         -> (TITLE_ASSIGNED) -> IDLE

The title step only happens when the reply brings the conversation to exactly
two messages. Any other order raises InvalidExchangeTransition.
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from support_chat.conf.config import Config
from support_chat.src.data_classes import ChatMessage, Conversation, FAQEntry, MessageRole
from support_chat.src.services.chat.context_assembler import ContextAssembler
from support_chat.src.services.store.conversation_store import ConversationStore

logger = logging.getLogger(__name__)


class ExchangeState(str, Enum):
    """States of a conversation during one exchange."""

    IDLE = "idle"
    USER_MESSAGE_APPENDED = "user_message_appended"
    CONTEXT_BUILT = "context_built"
    REPLY_APPENDED = "reply_appended"
    TITLE_ASSIGNED = "title_assigned"


ALLOWED_TRANSITIONS: Dict[ExchangeState, FrozenSet[ExchangeState]] = {
    ExchangeState.IDLE: frozenset([ExchangeState.USER_MESSAGE_APPENDED]),
    ExchangeState.USER_MESSAGE_APPENDED: frozenset([ExchangeState.CONTEXT_BUILT]),
    ExchangeState.CONTEXT_BUILT: frozenset([ExchangeState.REPLY_APPENDED]),
    ExchangeState.REPLY_APPENDED: frozenset(
        [ExchangeState.TITLE_ASSIGNED, ExchangeState.IDLE]
    ),
    ExchangeState.TITLE_ASSIGNED: frozenset([ExchangeState.IDLE]),
}


class InvalidExchangeTransition(RuntimeError):
    """Raised when exchange steps are performed out of order."""


class ConversationExchange:
    """Drives one user message and its reply through a conversation.

    Attributes:
        conversation: The conversation being mutated
        ledger: Conversation ledger every message is appended through
        assembler: Builds the upstream message list
        state: Current exchange state
    """

    def __init__(
        self,
        conversation: Conversation,
        ledger: ConversationStore,
        assembler: ContextAssembler,
        title_max_length: int = Config.TITLE_MAX_LENGTH,
    ) -> None:
        self.conversation = conversation
        self.ledger = ledger
        self.assembler = assembler
        self.title_max_length = title_max_length
        self.state = ExchangeState.IDLE

    def _advance(self, target: ExchangeState) -> None:
        if target not in ALLOWED_TRANSITIONS[self.state]:
            raise InvalidExchangeTransition(
                f"Cannot move from {self.state.value} to {target.value}"
            )
        self.state = target

    def append_user_message(self, content: str) -> ChatMessage:
        self._advance(ExchangeState.USER_MESSAGE_APPENDED)
        message = ChatMessage(role=MessageRole.USER, content=content)
        self.ledger.append_message(self.conversation, message)
        return message

    def build_context(self, matched_faq: Optional[FAQEntry]) -> List[Dict[str, str]]:
        self._advance(ExchangeState.CONTEXT_BUILT)
        return self.assembler.build(matched_faq, self.conversation.messages)

    def append_reply(self, reply: ChatMessage) -> None:
        self._advance(ExchangeState.REPLY_APPENDED)
        self.ledger.append_message(self.conversation, reply)

    def finish(self) -> ExchangeState:
        """Assign the title if this was the first exchange and return to IDLE.

        Returns:
            The last state passed through before IDLE
        """
        if self.state != ExchangeState.REPLY_APPENDED:
            raise InvalidExchangeTransition(
                f"Cannot finish an exchange in state {self.state.value}"
            )
        last_state = self.state
        if self.conversation.assign_title(max_length=self.title_max_length):
            self._advance(ExchangeState.TITLE_ASSIGNED)
            last_state = self.state
            logger.info(
                f"Conversation {self.conversation.id} titled {self.conversation.title!r}"
            )
        self._advance(ExchangeState.IDLE)
        return last_state

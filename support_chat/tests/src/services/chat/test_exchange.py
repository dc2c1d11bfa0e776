"""Unit tests for the ConversationExchange state machine."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock

from support_chat.src.data_classes import ChatMessage, Conversation, MessageRole
from support_chat.src.services.chat.context_assembler import ContextAssembler
from support_chat.src.services.chat.exchange import (
    ALLOWED_TRANSITIONS,
    ConversationExchange,
    ExchangeState,
    InvalidExchangeTransition,
)
from support_chat.src.services.store import ConversationStore


class TestConversationExchange(unittest.TestCase):
    """Test cases for the exchange state machine."""

    def setUp(self) -> None:
        """Set up test fixtures before each test method."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.store = ConversationStore(Path(self.temp_dir.name) / "conversations.json")
        self.ledger = Mock(wraps=self.store)
        self.conversation = Conversation(user_id="user-1", session_id="session-1")
        self.assembler = ContextAssembler()

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def _exchange(self) -> ConversationExchange:
        return ConversationExchange(self.conversation, self.ledger, self.assembler)

    def _reply(self, content: str = "Hello!") -> ChatMessage:
        return ChatMessage(role=MessageRole.ASSISTANT, content=content)

    def test_messages_are_appended_through_the_ledger(self) -> None:
        exchange = self._exchange()
        reply = self._reply()

        user_message = exchange.append_user_message("hi")
        exchange.build_context(None)
        exchange.append_reply(reply)

        self.assertEqual(
            [c.args for c in self.ledger.append_message.call_args_list],
            [(self.conversation, user_message), (self.conversation, reply)],
        )
        self.assertEqual(self.conversation.messages, [user_message, reply])
        # Appending does not persist; the caller saves after the exchange
        self.assertIsNone(self.store.find("user-1", "session-1"))

    def test_first_exchange_assigns_title(self) -> None:
        exchange = self._exchange()

        exchange.append_user_message("hi")
        self.assertEqual(exchange.state, ExchangeState.USER_MESSAGE_APPENDED)
        context = exchange.build_context(None)
        self.assertEqual(exchange.state, ExchangeState.CONTEXT_BUILT)
        self.assertEqual(context[-1], {"role": "user", "content": "hi"})
        exchange.append_reply(self._reply())
        self.assertEqual(exchange.state, ExchangeState.REPLY_APPENDED)

        last_state = exchange.finish()

        self.assertEqual(last_state, ExchangeState.TITLE_ASSIGNED)
        self.assertEqual(exchange.state, ExchangeState.IDLE)
        self.assertEqual(self.conversation.title, "hi")
        self.assertEqual(len(self.conversation.messages), 2)

    def test_later_exchange_keeps_title(self) -> None:
        first = self._exchange()
        first.append_user_message("first question")
        first.build_context(None)
        first.append_reply(self._reply())
        first.finish()

        second = self._exchange()
        second.append_user_message("second question")
        second.build_context(None)
        second.append_reply(self._reply("Second answer"))

        self.assertEqual(second.finish(), ExchangeState.REPLY_APPENDED)
        self.assertEqual(self.conversation.title, "first question")
        self.assertEqual(len(self.conversation.messages), 4)

    def test_long_first_message_title_is_truncated(self) -> None:
        exchange = self._exchange()
        exchange.append_user_message("x" * 60)
        exchange.build_context(None)
        exchange.append_reply(self._reply())
        exchange.finish()

        self.assertEqual(self.conversation.title, "x" * 50 + "...")

    def test_exchange_can_run_again_after_finish(self) -> None:
        exchange = self._exchange()
        for content in ["one", "two"]:
            exchange.append_user_message(content)
            exchange.build_context(None)
            exchange.append_reply(self._reply())
            exchange.finish()

        self.assertEqual(len(self.conversation.messages), 4)

    def test_context_before_user_message_is_rejected(self) -> None:
        exchange = self._exchange()

        with self.assertRaises(InvalidExchangeTransition):
            exchange.build_context(None)
        self.assertEqual(exchange.state, ExchangeState.IDLE)

    def test_reply_before_context_is_rejected(self) -> None:
        exchange = self._exchange()
        exchange.append_user_message("hi")

        with self.assertRaises(InvalidExchangeTransition):
            exchange.append_reply(self._reply())
        self.assertEqual(len(self.conversation.messages), 1)

    def test_second_user_message_is_rejected(self) -> None:
        exchange = self._exchange()
        exchange.append_user_message("hi")

        with self.assertRaises(InvalidExchangeTransition):
            exchange.append_user_message("hi again")

    def test_finish_before_reply_is_rejected(self) -> None:
        exchange = self._exchange()
        exchange.append_user_message("hi")
        exchange.build_context(None)

        with self.assertRaises(InvalidExchangeTransition):
            exchange.finish()

    def test_transition_table_covers_every_state(self) -> None:
        self.assertEqual(set(ALLOWED_TRANSITIONS), set(ExchangeState))
        self.assertEqual(
            ALLOWED_TRANSITIONS[ExchangeState.REPLY_APPENDED],
            {ExchangeState.TITLE_ASSIGNED, ExchangeState.IDLE},
        )


if __name__ == "__main__":
    unittest.main()

"""Tests for the Conversation data class and title derivation."""

from support_chat.src.data_classes import (
    ChatMessage,
    Conversation,
    MessageRole,
    derive_title,
)


def _user(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.USER, content=content)


def _assistant(content: str) -> ChatMessage:
    return ChatMessage(role=MessageRole.ASSISTANT, content=content)


def test_derive_title_short_message() -> None:
    assert derive_title("Where is my order?") == "Where is my order?"


def test_derive_title_exactly_fifty_characters() -> None:
    text = "a" * 50
    assert derive_title(text) == text


def test_derive_title_truncates_long_message() -> None:
    text = "I ordered a blue jacket last week and it still has not arrived"
    assert derive_title(text) == text[:50] + "..."


def test_assign_title_after_first_exchange() -> None:
    conversation = Conversation(user_id="u", session_id="s")
    conversation.append(_user("My invoice is wrong"))
    assert conversation.assign_title() is False
    assert conversation.title is None

    conversation.append(_assistant("Sorry to hear that."))
    assert conversation.assign_title() is True
    assert conversation.title == "My invoice is wrong"


def test_assign_title_only_at_two_messages() -> None:
    conversation = Conversation(user_id="u", session_id="s")
    for message in [_user("one"), _assistant("two"), _user("three")]:
        conversation.append(message)

    assert conversation.assign_title() is False
    assert conversation.title is None


def test_append_tracks_last_message_time() -> None:
    conversation = Conversation(user_id="u", session_id="s")
    message = ChatMessage(
        role=MessageRole.USER, content="hi", timestamp="2030-01-01T00:00:00+00:00"
    )

    conversation.append(message)

    assert conversation.updated_at == "2030-01-01T00:00:00+00:00"
    assert conversation.messages == [message]


def test_dict_round_trip() -> None:
    conversation = Conversation(user_id="u", session_id="s", title="hi")
    conversation.append(_user("hi"))

    data = conversation.to_dict()

    assert data["userId"] == "u"
    assert data["sessionId"] == "s"
    assert data["messages"][0]["role"] == "user"
    assert Conversation.from_dict(data) == conversation

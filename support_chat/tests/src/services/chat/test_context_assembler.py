"""Tests for upstream context assembly."""

from typing import List

import pytest

from support_chat.conf.prompts import SUPPORT_SYSTEM_PROMPT
from support_chat.src.data_classes import ChatMessage, FAQEntry, MessageRole
from support_chat.src.services.chat.context_assembler import ContextAssembler


def _history(count: int) -> List[ChatMessage]:
    roles = [MessageRole.USER, MessageRole.ASSISTANT]
    return [
        ChatMessage(role=roles[index % 2], content=f"message {index + 1}")
        for index in range(count)
    ]


@pytest.fixture
def faq() -> FAQEntry:
    return FAQEntry(
        question="How do I reset my password?",
        answer="Use the Forgot password link.",
        keywords=["reset", "password"],
        priority=5,
    )


def test_single_greeting_without_match() -> None:
    context = ContextAssembler().build(
        None, [ChatMessage(role=MessageRole.USER, content="hi")]
    )

    assert context == [
        {"role": "system", "content": SUPPORT_SYSTEM_PROMPT},
        {"role": "user", "content": "hi"},
    ]


def test_history_is_windowed_to_last_ten() -> None:
    history = _history(13)

    context = ContextAssembler().build(None, history)

    assert len(context) == 11
    assert context[0] == {"role": "system", "content": SUPPORT_SYSTEM_PROMPT}
    assert [m["content"] for m in context[1:]] == [
        f"message {n}" for n in range(4, 14)
    ]


def test_matched_faq_follows_system_prompt(faq: FAQEntry) -> None:
    history = _history(13)

    context = ContextAssembler().build(faq, history)

    assert len(context) == 12
    assert context[0]["content"] == SUPPORT_SYSTEM_PROMPT
    assert context[1] == {
        "role": "system",
        "content": "Relevant FAQ: Q: How do I reset my password? "
        "A: Use the Forgot password link.",
    }
    assert context[2]["content"] == "message 4"
    assert context[-1]["content"] == "message 13"


def test_roles_are_preserved() -> None:
    context = ContextAssembler().build(None, _history(3))

    assert [m["role"] for m in context] == ["system", "user", "assistant", "user"]


def test_custom_settings(faq: FAQEntry) -> None:
    assembler = ContextAssembler(
        system_prompt="Be brief.", faq_template="{answer}", window_size=2
    )

    context = assembler.build(faq, _history(5))

    assert context == [
        {"role": "system", "content": "Be brief."},
        {"role": "system", "content": "Use the Forgot password link."},
        {"role": "assistant", "content": "message 4"},
        {"role": "user", "content": "message 5"},
    ]


def test_zero_window_sends_no_history() -> None:
    context = ContextAssembler(window_size=0).build(None, _history(4))

    assert context == [{"role": "system", "content": SUPPORT_SYSTEM_PROMPT}]

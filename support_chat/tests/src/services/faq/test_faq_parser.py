"""Tests for the FAQ document parser and its state machine."""

import pytest

from support_chat.src.services.faq.faq_parser import (
    FAQPair,
    FAQTextParser,
    LineKind,
    ParserState,
    classify_line,
)


@pytest.fixture
def parser() -> FAQTextParser:
    return FAQTextParser()


def test_single_pair(parser: FAQTextParser) -> None:
    pairs = parser.parse("Q: What is your refund policy?\nA: Refunds within 30 days.")
    assert pairs == [
        FAQPair(question="What is your refund policy?", answer="Refunds within 30 days.")
    ]


def test_two_pairs_keep_document_order(parser: FAQTextParser) -> None:
    text = (
        "Q: How do I reset my password?\n"
        "A: Use the Forgot password link.\n"
        "\n"
        "Q: Do you ship abroad?\n"
        "A: Yes, to most countries.\n"
    )
    pairs = parser.parse(text)
    assert [pair.question for pair in pairs] == [
        "How do I reset my password?",
        "Do you ship abroad?",
    ]
    assert [pair.answer for pair in pairs] == [
        "Use the Forgot password link.",
        "Yes, to most countries.",
    ]


def test_trailing_question_without_answer_is_dropped(parser: FAQTextParser) -> None:
    text = "Q: First?\nA: One.\nQ: Second?\nA: Two.\nQ: Unanswered?"
    pairs = parser.parse(text)
    assert len(pairs) == 2
    assert all(pair.question != "Unanswered?" for pair in pairs)


def test_long_markers_are_case_insensitive(parser: FAQTextParser) -> None:
    text = "QUESTION: Can I pay by card?\nanswer: Yes.\nq: And by invoice?\nA: Only for businesses."
    pairs = parser.parse(text)
    assert pairs == [
        FAQPair(question="Can I pay by card?", answer="Yes."),
        FAQPair(question="And by invoice?", answer="Only for businesses."),
    ]


def test_continuation_lines_are_space_joined(parser: FAQTextParser) -> None:
    text = (
        "Q: How long does\n"
        "delivery take?\n"
        "A: Usually three\n"
        "to five\n"
        "business days.\n"
    )
    assert parser.parse(text) == [
        FAQPair(
            question="How long does delivery take?",
            answer="Usually three to five business days.",
        )
    ]


def test_lines_are_trimmed_and_blank_lines_skipped(parser: FAQTextParser) -> None:
    text = "   Q:   Spaced out?   \n\n\n   A:  Trimmed.  \r\n"
    assert parser.parse(text) == [FAQPair(question="Spaced out?", answer="Trimmed.")]


def test_second_answer_marker_replaces_answer(parser: FAQTextParser) -> None:
    text = "Q: Which answer wins?\nA: The first.\nA: The second."
    assert parser.parse(text) == [
        FAQPair(question="Which answer wins?", answer="The second.")
    ]


def test_text_before_any_question_is_discarded(parser: FAQTextParser) -> None:
    report = parser.parse_with_report("Frequently asked questions\nQ: Hi?\nA: Hello.")
    assert report.pairs == [FAQPair(question="Hi?", answer="Hello.")]
    assert report.discarded_lines == 1
    assert report.dropped_fragments == 0


def test_answer_without_question_is_dropped(parser: FAQTextParser) -> None:
    report = parser.parse_with_report("A: Orphaned answer\nQ: Real?\nA: Yes.")
    assert report.pairs == [FAQPair(question="Real?", answer="Yes.")]
    assert report.dropped_fragments == 1


def test_report_counts_dropped_fragments(parser: FAQTextParser) -> None:
    text = "Q: No answer here\nQ: Answered?\nA: Yes.\nQ: Trailing"
    report = parser.parse_with_report(text)
    assert report.pairs == [FAQPair(question="Answered?", answer="Yes.")]
    assert report.dropped_fragments == 2


@pytest.mark.parametrize("text", ["", "\n\n", "just some prose\nwithout markers"])
def test_documents_without_pairs_yield_nothing(parser: FAQTextParser, text: str) -> None:
    assert parser.parse(text) == []


def test_marker_with_empty_remainder_starts_no_question(parser: FAQTextParser) -> None:
    text = "Q:\nWhat is this?\nA:\nAn answer on the next line."
    report = parser.parse_with_report(text)
    assert report.pairs == []
    assert report.discarded_lines == 1
    assert report.dropped_fragments == 1


@pytest.mark.parametrize(
    "line, expected_kind, expected_text",
    [
        ("Q: Hello?", LineKind.QUESTION_MARKER, "Hello?"),
        ("question:Hello?", LineKind.QUESTION_MARKER, "Hello?"),
        ("A: Hi", LineKind.ANSWER_MARKER, "Hi"),
        ("Answer:   Hi", LineKind.ANSWER_MARKER, "Hi"),
        ("Quick question", LineKind.TEXT, "Quick question"),
        ("Also: not an answer", LineKind.TEXT, "Also: not an answer"),
    ],
)
def test_classify_line(line: str, expected_kind: LineKind, expected_text: str) -> None:
    assert classify_line(line) == (expected_kind, expected_text)


@pytest.mark.parametrize(
    "state, kind, expected",
    [
        (ParserState.ACCUMULATING_QUESTION, LineKind.QUESTION_MARKER, ParserState.ACCUMULATING_QUESTION),
        (ParserState.ACCUMULATING_QUESTION, LineKind.ANSWER_MARKER, ParserState.ACCUMULATING_ANSWER),
        (ParserState.ACCUMULATING_QUESTION, LineKind.TEXT, ParserState.ACCUMULATING_QUESTION),
        (ParserState.ACCUMULATING_ANSWER, LineKind.QUESTION_MARKER, ParserState.ACCUMULATING_QUESTION),
        (ParserState.ACCUMULATING_ANSWER, LineKind.ANSWER_MARKER, ParserState.ACCUMULATING_ANSWER),
        (ParserState.ACCUMULATING_ANSWER, LineKind.TEXT, ParserState.ACCUMULATING_ANSWER),
    ],
)
def test_transition_table(state: ParserState, kind: LineKind, expected: ParserState) -> None:
    assert FAQTextParser.transition(state, kind) == expected

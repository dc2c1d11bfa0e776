"""Parser that turns uploaded FAQ documents into question/answer pairs.

Documents follow a line-oriented marker convention::

    Q: How do I reset my password?
    A: Use the "Forgot password" link
    on the login page.

Parsing is a two-state machine:

==========================  ====================  ==========================
Line                        Next state            Effect
==========================  ====================  ==========================
``q:`` / ``question:``      ACCUMULATING_QUESTION emit pending complete pair,
                                                  start a new question
``a:`` / ``answer:``        ACCUMULATING_ANSWER   replace the current answer
other, in answer state      ACCUMULATING_ANSWER   append to the answer
other, in question state    ACCUMULATING_QUESTION append to the question if
                                                  one was started, else drop
==========================  ====================  ==========================

The parser never raises. A pair missing its question or answer is dropped
silently; ``parse_with_report`` counts those losses so callers can surface them.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

logger = logging.getLogger(__name__)

_QUESTION_MARKER = re.compile(r"^(q:|question:)", re.IGNORECASE)
_ANSWER_MARKER = re.compile(r"^(a:|answer:)", re.IGNORECASE)


class ParserState(str, Enum):
    """States of the FAQ parser."""

    ACCUMULATING_QUESTION = "accumulating_question"
    ACCUMULATING_ANSWER = "accumulating_answer"


class LineKind(str, Enum):
    """Classification of a single input line."""

    QUESTION_MARKER = "question_marker"
    ANSWER_MARKER = "answer_marker"
    TEXT = "text"


@dataclass(frozen=True)
class FAQPair:
    """A parsed question/answer pair."""

    question: str
    answer: str


@dataclass
class ParseReport:
    """Outcome of parsing a document.

    Attributes:
        pairs: Complete pairs, in document order
        dropped_fragments: Started pairs discarded for lacking a question or answer
        discarded_lines: Text lines seen before any question was started
    """

    pairs: List[FAQPair] = field(default_factory=list)
    dropped_fragments: int = 0
    discarded_lines: int = 0


@dataclass
class _PendingPair:
    question: str = ""
    answer: str = ""

    def is_complete(self) -> bool:
        return bool(self.question) and bool(self.answer)

    def is_empty(self) -> bool:
        return not self.question and not self.answer


def classify_line(line: str) -> Tuple[LineKind, str]:
    """Classify a trimmed line and strip its marker.

    Returns:
        The line kind and the remaining text
    """
    match = _QUESTION_MARKER.match(line)
    if match:
        return LineKind.QUESTION_MARKER, line[match.end() :].strip()
    match = _ANSWER_MARKER.match(line)
    if match:
        return LineKind.ANSWER_MARKER, line[match.end() :].strip()
    return LineKind.TEXT, line


class FAQTextParser:
    """Lenient, line-oriented FAQ document parser."""

    @staticmethod
    def transition(state: ParserState, kind: LineKind) -> ParserState:
        """Return the state that follows a line of the given kind."""
        if kind == LineKind.QUESTION_MARKER:
            return ParserState.ACCUMULATING_QUESTION
        if kind == LineKind.ANSWER_MARKER:
            return ParserState.ACCUMULATING_ANSWER
        return state

    def parse(self, raw_text: str) -> List[FAQPair]:
        """Parse a document into question/answer pairs.

        Args:
            raw_text: Document text

        Returns:
            Complete pairs in document order
        """
        return self.parse_with_report(raw_text).pairs

    def parse_with_report(self, raw_text: str) -> ParseReport:
        """Parse a document and report what was lost.

        Args:
            raw_text: Document text

        Returns:
            ParseReport with the pairs and loss counters
        """
        report = ParseReport()
        state = ParserState.ACCUMULATING_QUESTION
        pending = _PendingPair()

        lines = [line.strip() for line in (raw_text or "").split("\n")]
        for line in lines:
            if not line:
                continue

            kind, text = classify_line(line)

            if kind == LineKind.QUESTION_MARKER:
                self._close_pair(pending, report)
                pending = _PendingPair(question=text)
            elif kind == LineKind.ANSWER_MARKER:
                pending.answer = text
            elif state == ParserState.ACCUMULATING_ANSWER:
                pending.answer = _join(pending.answer, text)
            elif pending.question:
                pending.question = _join(pending.question, text)
            else:
                report.discarded_lines += 1

            state = self.transition(state, kind)

        self._close_pair(pending, report)

        if report.dropped_fragments or report.discarded_lines:
            logger.warning(
                f"FAQ parse dropped {report.dropped_fragments} incomplete pairs "
                f"and {report.discarded_lines} stray lines"
            )
        logger.debug(f"Parsed {len(report.pairs)} FAQ pairs")
        return report

    @staticmethod
    def _close_pair(pending: _PendingPair, report: ParseReport) -> None:
        if pending.is_empty():
            return
        if pending.is_complete():
            report.pairs.append(
                FAQPair(question=pending.question.strip(), answer=pending.answer.strip())
            )
        else:
            report.dropped_fragments += 1


def _join(current: str, line: str) -> str:
    return f"{current} {line}" if current else line

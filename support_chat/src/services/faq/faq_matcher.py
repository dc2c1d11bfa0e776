"""Lexical FAQ relevance matching.

The matcher scans a small, priority-ordered candidate list and returns the first
entry that overlaps with the incoming message. There is no scoring: entries that
come first in the candidate order win.
"""

import logging
from typing import Optional, Sequence

from support_chat.conf.config import Config
from support_chat.src.data_classes import FAQEntry
from support_chat.src.services.store.faq_store import FAQStore

logger = logging.getLogger(__name__)


class FAQMatcher:
    """Finds at most one FAQ entry relevant to a message.

    Attributes:
        faq_store: Source of active FAQ entries, if store lookups are used
        candidate_limit: Number of highest-priority entries considered
    """

    def __init__(
        self,
        faq_store: Optional[FAQStore] = None,
        candidate_limit: int = Config.FAQ_CANDIDATE_LIMIT,
    ) -> None:
        self.faq_store = faq_store
        self.candidate_limit = candidate_limit

    @staticmethod
    def is_relevant(message_lower: str, faq: FAQEntry) -> bool:
        """Check a single candidate against an already lower-cased message.

        A candidate is relevant if any keyword occurs in the message, the message
        contains the question, or the question contains the message.
        """
        question_lower = faq.question.lower()
        return (
            any(keyword.lower() in message_lower for keyword in faq.keywords)
            or question_lower in message_lower
            or message_lower in question_lower
        )

    def match(self, message: str, faqs: Sequence[FAQEntry]) -> Optional[FAQEntry]:
        """Return the first relevant entry in the given order.

        Args:
            message: The incoming user message
            faqs: Active entries, sorted by descending priority

        Returns:
            The first matching entry, or None
        """
        message_lower = message.lower()
        for faq in faqs:
            if self.is_relevant(message_lower, faq):
                logger.info(f"Matched FAQ {faq.id}: {faq.question!r}")
                return faq
        return None

    def find_relevant(self, message: str) -> Optional[FAQEntry]:
        """Look up candidates in the FAQ store and match the message against them.

        FAQ assistance is best effort: any store failure is logged and reported
        as no match.

        Args:
            message: The incoming user message

        Returns:
            The first matching entry, or None
        """
        if self.faq_store is None:
            return None
        try:
            candidates = self.faq_store.find_active(limit=self.candidate_limit)
        except Exception as e:
            logger.error(f"FAQ search error: {str(e)}")
            return None
        return self.match(message, candidates)

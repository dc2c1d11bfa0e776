"""Unit tests for the FAQMatcher class."""

import unittest
from unittest.mock import Mock

from support_chat.src.data_classes import FAQEntry
from support_chat.src.services.faq.faq_matcher import FAQMatcher
from support_chat.src.services.store.faq_store import FAQStore


class TestFAQMatcher(unittest.TestCase):
    """Test cases for FAQMatcher."""

    def setUp(self) -> None:
        """Set up test fixtures before each test method."""
        self.password_faq = FAQEntry(
            question="How do I reset my password?",
            answer="Use the Forgot password link on the login page.",
            keywords=["reset", "password"],
            priority=5,
        )
        self.shipping_faq = FAQEntry(
            question="Do you ship internationally?",
            answer="Yes, to most countries.",
            keywords=["ship", "international"],
            priority=3,
        )
        self.mock_store = Mock(spec=FAQStore)
        self.matcher = FAQMatcher(faq_store=self.mock_store, candidate_limit=10)

    def test_keyword_match(self) -> None:
        result = self.matcher.match(
            "I need to reset my password please", [self.password_faq]
        )
        self.assertIs(result, self.password_faq)

    def test_no_overlap_returns_none(self) -> None:
        result = self.matcher.match(
            "what's the weather", [self.password_faq, self.shipping_faq]
        )
        self.assertIsNone(result)

    def test_first_match_wins(self) -> None:
        other_password_faq = FAQEntry(
            question="Password rules",
            answer="At least 12 characters.",
            keywords=["password"],
            priority=1,
        )
        result = self.matcher.match(
            "my password expired", [other_password_faq, self.password_faq]
        )
        self.assertIs(result, other_password_faq)

        result = self.matcher.match(
            "my password expired", [self.password_faq, other_password_faq]
        )
        self.assertIs(result, self.password_faq)

    def test_message_containing_question_matches(self) -> None:
        faq = FAQEntry(question="Opening hours", answer="9 to 5.", keywords=[])
        result = self.matcher.match("What are your OPENING HOURS today?", [faq])
        self.assertIs(result, faq)

    def test_question_containing_message_matches(self) -> None:
        faq = FAQEntry(
            question="Can I change my delivery address?", answer="Yes.", keywords=[]
        )
        result = self.matcher.match("Delivery Address", [faq])
        self.assertIs(result, faq)

    def test_keyword_matches_as_substring(self) -> None:
        # "ship" occurs inside "shipping"
        result = self.matcher.match("How much is shipping?", [self.shipping_faq])
        self.assertIs(result, self.shipping_faq)

    def test_empty_candidates(self) -> None:
        self.assertIsNone(self.matcher.match("reset password", []))

    def test_find_relevant_uses_store_candidates(self) -> None:
        self.mock_store.find_active.return_value = [self.shipping_faq, self.password_faq]

        result = self.matcher.find_relevant("I forgot my password")

        self.mock_store.find_active.assert_called_once_with(limit=10)
        self.assertIs(result, self.password_faq)

    def test_find_relevant_store_failure_means_no_match(self) -> None:
        self.mock_store.find_active.side_effect = OSError("disk unavailable")

        with self.assertLogs(
            "support_chat.src.services.faq.faq_matcher", level="ERROR"
        ) as logs:
            result = self.matcher.find_relevant("reset my password")

        self.assertIsNone(result)
        self.assertIn("FAQ search error", logs.output[0])

    def test_find_relevant_without_store(self) -> None:
        matcher = FAQMatcher()
        self.assertIsNone(matcher.find_relevant("reset my password"))


if __name__ == "__main__":
    unittest.main()

"""Keyword extraction for FAQ entries.

Keywords are derived once, when an entry is created or updated, and are later
matched as plain substrings against incoming messages.
"""

import re
from typing import FrozenSet, Iterable, List, Optional

from support_chat.conf.config import Config

# Everything that is neither a word character nor whitespace
_PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")


class KeywordExtractor:
    """Derives a bounded, deduplicated keyword list from free text.

    Attributes:
        stop_words: Words that are never keywords
        min_length: Minimum token length to be kept
        max_keywords: Maximum number of keywords returned
    """

    def __init__(
        self,
        stop_words: Optional[Iterable[str]] = None,
        min_length: int = Config.MIN_KEYWORD_LENGTH,
        max_keywords: int = Config.MAX_KEYWORDS,
    ) -> None:
        self.stop_words: FrozenSet[str] = frozenset(
            Config.STOP_WORDS if stop_words is None else stop_words
        )
        self.min_length = min_length
        self.max_keywords = max_keywords

    def tokenize(self, text: str) -> List[str]:
        """Lower-case the text, strip punctuation and split on whitespace."""
        return _PUNCTUATION_PATTERN.sub("", text.lower()).split()

    def extract(self, text: str) -> List[str]:
        """Extract keywords from text.

        Args:
            text: Arbitrary input text

        Returns:
            Unique keywords in first-seen order, at most max_keywords long.
            Empty input yields an empty list.
        """
        keywords: List[str] = []
        for token in self.tokenize(text):
            if len(token) < self.min_length or token in self.stop_words:
                continue
            if token in keywords:
                continue
            keywords.append(token)
            if len(keywords) == self.max_keywords:
                break
        return keywords

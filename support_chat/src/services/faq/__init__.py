"""FAQ services package.

Components:
- KeywordExtractor: derives keywords from FAQ text
- FAQTextParser: splits uploaded documents into question/answer pairs
- FAQMatcher: picks the FAQ entry relevant to a message
- DocumentExtractor: extracts text from PDF and plain-text uploads
- FAQService: CRUD and ingestion on top of the FAQ store
"""

from .document_extractor import (
    DocumentExtractionError,
    DocumentExtractor,
    UnsupportedDocumentError,
)
from .faq_matcher import FAQMatcher
from .faq_parser import FAQPair, FAQTextParser, LineKind, ParseReport, ParserState
from .faq_service import FAQService, IngestionResult
from .keyword_extractor import KeywordExtractor

__all__ = [
    "DocumentExtractionError",
    "DocumentExtractor",
    "UnsupportedDocumentError",
    "FAQMatcher",
    "FAQPair",
    "FAQTextParser",
    "LineKind",
    "ParseReport",
    "ParserState",
    "FAQService",
    "IngestionResult",
    "KeywordExtractor",
]

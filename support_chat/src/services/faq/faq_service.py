"""FAQ management and document ingestion service.

This module owns every write to the FAQ store: single-entry CRUD from the admin
API and bulk creation from uploaded documents. Keywords are always derived here,
so entries in the store carry keywords consistent with their text.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from support_chat.conf.config import Config
from support_chat.src.data_classes import FAQEntry, normalize_keywords
from support_chat.src.services.faq.document_extractor import DocumentExtractor
from support_chat.src.services.faq.faq_parser import FAQTextParser
from support_chat.src.services.faq.keyword_extractor import KeywordExtractor
from support_chat.src.services.store.faq_store import FAQStore

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    """Outcome of ingesting one uploaded document.

    Attributes:
        entries: FAQ entries created and persisted
        dropped_fragments: Question/answer fragments lost for being incomplete
        discarded_lines: Lines ignored because no question had started
    """

    entries: List[FAQEntry] = field(default_factory=list)
    dropped_fragments: int = 0
    discarded_lines: int = 0


class FAQService:
    """Creates, updates, lists and ingests FAQ entries.

    Attributes:
        faq_store: Persistent FAQ collection
        keyword_extractor: Derives keywords from question and answer text
        parser: Splits uploaded documents into question/answer pairs
        document_extractor: Turns uploaded bytes into text
        default_category: Category for entries created without one
        upload_category: Category for uploaded entries without one
    """

    def __init__(
        self,
        faq_store: FAQStore,
        keyword_extractor: Optional[KeywordExtractor] = None,
        parser: Optional[FAQTextParser] = None,
        document_extractor: Optional[DocumentExtractor] = None,
        default_category: str = Config.DEFAULT_CATEGORY,
        upload_category: str = Config.UPLOAD_CATEGORY,
    ) -> None:
        self.faq_store = faq_store
        self.keyword_extractor = keyword_extractor or KeywordExtractor()
        self.parser = parser or FAQTextParser()
        self.document_extractor = document_extractor or DocumentExtractor()
        self.default_category = default_category
        self.upload_category = upload_category

    def derive_keywords(self, question: str, answer: str) -> List[str]:
        return self.keyword_extractor.extract(f"{question} {answer}")

    def build_entry(
        self,
        question: str,
        answer: str,
        category: Optional[str] = None,
        keywords: Optional[List[str]] = None,
        priority: Optional[int] = None,
    ) -> FAQEntry:
        """Build an unsaved entry, deriving keywords unless some are given."""
        if keywords:
            keywords = normalize_keywords(keywords, self.keyword_extractor.max_keywords)
        else:
            keywords = self.derive_keywords(question, answer)
        return FAQEntry(
            question=question,
            answer=answer,
            category=category or self.default_category,
            keywords=keywords,
            priority=priority or Config.DEFAULT_PRIORITY,
        )

    def create_faq(
        self,
        question: str,
        answer: str,
        category: Optional[str] = None,
        keywords: Optional[List[str]] = None,
        priority: Optional[int] = None,
    ) -> FAQEntry:
        """Create and persist a single FAQ entry.

        Args:
            question: Question text
            answer: Answer text
            category: Category label, defaults to the configured default
            keywords: Explicit keywords; derived from the text when empty
            priority: Ranking priority, defaults to the lowest priority

        Returns:
            The persisted entry
        """
        entry = self.build_entry(question, answer, category, keywords, priority)
        self.faq_store.save(entry)
        logger.info(f"Created FAQ {entry.id} in category {entry.category!r}")
        return entry

    def update_faq(
        self,
        faq_id: str,
        question: Optional[str] = None,
        answer: Optional[str] = None,
        category: Optional[str] = None,
        priority: Optional[int] = None,
        is_active: Optional[bool] = None,
    ) -> Optional[FAQEntry]:
        """Update an entry and re-derive its keywords from the resulting text.

        Returns:
            The updated entry, or None if no entry has that id
        """
        with self.faq_store.lock:
            existing = self.faq_store.get(faq_id)
            if existing is None:
                return None
            new_question = question if question is not None else existing.question
            new_answer = answer if answer is not None else existing.answer
            return self.faq_store.update(
                faq_id,
                {
                    "question": new_question,
                    "answer": new_answer,
                    "category": category,
                    "priority": priority,
                    "is_active": is_active,
                    "keywords": self.derive_keywords(new_question, new_answer),
                },
            )

    def delete_faq(self, faq_id: str) -> bool:
        return self.faq_store.delete(faq_id)

    def list_faqs(
        self,
        page: int = 1,
        limit: int = Config.DEFAULT_PAGE_SIZE,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[FAQEntry], int]:
        return self.faq_store.list(
            page=page, limit=limit, category=category, search=search
        )

    def ingest_document(
        self, data: bytes, content_type: str, category: Optional[str] = None
    ) -> IngestionResult:
        """Turn an uploaded document into persisted FAQ entries.

        Args:
            data: Raw document bytes
            content_type: Declared MIME type (plain text or PDF)
            category: Category for all created entries

        Returns:
            IngestionResult with the created entries and what was dropped

        Raises:
            UnsupportedDocumentError: If the content type is not supported
            DocumentExtractionError: If the document cannot be read
        """
        text = self.document_extractor.extract(data, content_type)
        report = self.parser.parse_with_report(text)

        entries = [
            self.build_entry(
                pair.question, pair.answer, category=category or self.upload_category
            )
            for pair in report.pairs
        ]
        if entries:
            self.faq_store.save_many(entries)

        logger.info(
            f"Ingested {len(entries)} FAQs "
            f"({report.dropped_fragments} incomplete fragments dropped)"
        )
        return IngestionResult(
            entries=entries,
            dropped_fragments=report.dropped_fragments,
            discarded_lines=report.discarded_lines,
        )

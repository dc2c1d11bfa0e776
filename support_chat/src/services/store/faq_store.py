"""JSON-backed storage for FAQ entries."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from support_chat.src.data_classes import FAQEntry, utc_timestamp
from support_chat.src.services.store.json_store import JsonFileStore

logger = logging.getLogger(__name__)

# Fields callers may change through update()
UPDATABLE_FIELDS = ("question", "answer", "category", "keywords", "priority", "is_active")


def _ranking_key(entry: FAQEntry) -> Tuple[int, str]:
    return (entry.priority, entry.created_at)


def _matches_search(entry: FAQEntry, search: str) -> bool:
    terms = search.lower().split()
    haystack = " ".join(
        [entry.question.lower(), entry.answer.lower(), " ".join(entry.keywords)]
    )
    return any(term in haystack for term in terms)


class FAQStore(JsonFileStore):
    """Persistent collection of FAQ entries.

    Entries are returned ranked by descending priority, newest first among equal
    priorities.
    """

    def _load(self) -> List[FAQEntry]:
        return [FAQEntry.from_dict(record) for record in self._read_records()]

    def _dump(self, entries: Iterable[FAQEntry]) -> None:
        self._write_records([entry.to_dict() for entry in entries])

    def find_active(self, limit: int) -> List[FAQEntry]:
        """Return the highest-priority active entries.

        Args:
            limit: Maximum number of entries returned

        Returns:
            Active entries sorted by descending priority
        """
        with self.lock:
            entries = [entry for entry in self._load() if entry.is_active]
        entries.sort(key=_ranking_key, reverse=True)
        return entries[:limit]

    def get(self, faq_id: str) -> Optional[FAQEntry]:
        with self.lock:
            for entry in self._load():
                if entry.id == faq_id:
                    return entry
        return None

    def save(self, entry: FAQEntry) -> FAQEntry:
        """Insert an entry, or replace the stored entry with the same id."""
        return self.save_many([entry])[0]

    def save_many(self, entries: List[FAQEntry]) -> List[FAQEntry]:
        """Insert or replace several entries in a single write.

        Args:
            entries: Entries to persist

        Returns:
            The persisted entries
        """
        with self.lock:
            stored = {entry.id: entry for entry in self._load()}
            for entry in entries:
                entry.updated_at = utc_timestamp()
                stored[entry.id] = entry
            self._dump(stored.values())
        logger.info(f"Saved {len(entries)} FAQ entries")
        return entries

    def update(self, faq_id: str, fields: Dict[str, Any]) -> Optional[FAQEntry]:
        """Apply field changes to a stored entry.

        Args:
            faq_id: Identifier of the entry
            fields: Attribute values keyed by FAQEntry field name; None values
                are ignored

        Returns:
            The updated entry, or None if no entry has that id
        """
        with self.lock:
            entries = self._load()
            for index, entry in enumerate(entries):
                if entry.id != faq_id:
                    continue
                changes = {
                    name: value
                    for name, value in fields.items()
                    if name in UPDATABLE_FIELDS and value is not None
                }
                updated = FAQEntry(
                    id=entry.id,
                    question=changes.get("question", entry.question),
                    answer=changes.get("answer", entry.answer),
                    category=changes.get("category", entry.category),
                    keywords=changes.get("keywords", entry.keywords),
                    priority=changes.get("priority", entry.priority),
                    is_active=changes.get("is_active", entry.is_active),
                    created_at=entry.created_at,
                    updated_at=utc_timestamp(),
                )
                entries[index] = updated
                self._dump(entries)
                logger.info(f"Updated FAQ {faq_id}: {sorted(changes)}")
                return updated
        logger.info(f"FAQ {faq_id} not found for update")
        return None

    def delete(self, faq_id: str) -> bool:
        """Delete an entry.

        Returns:
            True if an entry was removed
        """
        with self.lock:
            entries = self._load()
            remaining = [entry for entry in entries if entry.id != faq_id]
            if len(remaining) == len(entries):
                return False
            self._dump(remaining)
        logger.info(f"Deleted FAQ {faq_id}")
        return True

    def list(
        self,
        page: int = 1,
        limit: int = 20,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[FAQEntry], int]:
        """List entries with optional filters and pagination.

        Args:
            page: 1-based page number
            limit: Page size
            category: Only entries in this category
            search: Case-insensitive terms matched against question, answer and
                keywords; an entry matches if any term occurs

        Returns:
            The requested page and the total number of matching entries
        """
        with self.lock:
            entries = self._load()
        if category:
            entries = [entry for entry in entries if entry.category == category]
        if search:
            entries = [entry for entry in entries if _matches_search(entry, search)]
        entries.sort(key=_ranking_key, reverse=True)

        total = len(entries)
        skip = (max(page, 1) - 1) * limit
        return entries[skip : skip + limit], total

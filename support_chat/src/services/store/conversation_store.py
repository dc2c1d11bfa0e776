"""JSON-backed conversation ledger.

Each conversation is stored as one record keyed by (userId, sessionId).
"""

import logging
from typing import List, Optional

from support_chat.src.data_classes import ChatMessage, Conversation
from support_chat.src.services.store.json_store import JsonFileStore

logger = logging.getLogger(__name__)


class ConversationStore(JsonFileStore):
    """Persistent store of per-session conversations.

    Conversations returned by this store are detached copies: changes only become
    visible to other readers once passed to save().
    """

    def find(self, user_id: str, session_id: str) -> Optional[Conversation]:
        """Find the conversation of a session.

        Returns:
            The conversation, or None if the session has none yet
        """
        with self.lock:
            for record in self._read_records():
                if record["userId"] == user_id and record["sessionId"] == session_id:
                    return Conversation.from_dict(record)
        return None

    def create(self, user_id: str, session_id: str) -> Conversation:
        """Start a new, empty conversation. It is persisted on the first save()."""
        logger.info(f"Creating conversation for user {user_id}, session {session_id}")
        return Conversation(user_id=user_id, session_id=session_id)

    def append_message(self, conversation: Conversation, message: ChatMessage) -> None:
        conversation.append(message)

    def save(self, conversation: Conversation) -> Conversation:
        """Insert or replace the stored record of a conversation."""
        record = conversation.to_dict()
        with self.lock:
            records = self._read_records()
            for index, existing in enumerate(records):
                if (existing["userId"], existing["sessionId"]) == conversation.key:
                    records[index] = record
                    break
            else:
                records.append(record)
            self._write_records(records)
        logger.debug(
            f"Saved conversation {conversation.id} "
            f"with {len(conversation.messages)} messages"
        )
        return conversation

    def list_for_user(
        self, user_id: str, page: int = 1, limit: int = 50
    ) -> List[Conversation]:
        """List a user's conversations, most recently updated first.

        Args:
            user_id: Owner of the conversations
            page: 1-based page number
            limit: Page size
        """
        with self.lock:
            records = [r for r in self._read_records() if r["userId"] == user_id]
        records.sort(key=lambda r: r.get("updatedAt", ""), reverse=True)
        skip = (max(page, 1) - 1) * limit
        return [Conversation.from_dict(r) for r in records[skip : skip + limit]]

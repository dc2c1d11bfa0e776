"""Per-session locks that serialize exchanges on the same conversation."""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Tuple

SessionKey = Tuple[str, str]


class _SessionLock:
    """A session's lock and the number of threads holding or waiting on it."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class SessionLockRegistry:
    """Hands out one lock per (user_id, session_id) key.

    Exchanges on the same session must hold that session's lock for the whole
    read-modify-write of the conversation; different sessions never block each
    other. A session's entry lives only while some thread holds or waits for
    it, so the registry is empty once every exchange has finished.
    """

    def __init__(self) -> None:
        self._entries: Dict[SessionKey, _SessionLock] = {}
        self._registry_lock = threading.Lock()

    @contextmanager
    def hold(self, user_id: str, session_id: str) -> Iterator[threading.Lock]:
        """Acquire the session's lock for the duration of the block.

        Args:
            user_id: Owner of the session
            session_id: Identifier of the session

        Yields:
            The acquired session lock
        """
        key = (user_id, session_id)
        with self._registry_lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = _SessionLock()
                self._entries[key] = entry
            entry.holders += 1

        try:
            with entry.lock:
                yield entry.lock
        finally:
            with self._registry_lock:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._entries)

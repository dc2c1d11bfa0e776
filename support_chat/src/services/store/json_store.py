"""Base class for thread-safe JSON file storage.

Records are kept as a JSON array in a single file. Every operation reads the
whole file, modifies it in memory and writes it back while holding a lock.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Union

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Stores a list of JSON records in a file.

    Attributes:
        file_path (Path): Path to the JSON file
        lock (threading.RLock): Lock guarding every read-modify-write cycle
    """

    def __init__(self, file_path: Union[str, Path]) -> None:
        """Initialize the JSON storage.

        Args:
            file_path: Location of the JSON file, created if missing
        """
        self.file_path = Path(file_path)
        self.lock = threading.RLock()
        self.initialize_storage()

    def initialize_storage(self) -> None:
        """Create the storage file as an empty JSON array if it doesn't exist."""
        if not self.file_path.exists():
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump([], f)
            logger.info(f"Storage file initialized at {self.file_path}")

    def _read_records(self) -> List[Dict[str, Any]]:
        """Read all records. Callers must hold the lock."""
        if not self.file_path.exists() or os.path.getsize(self.file_path) == 0:
            return []
        with open(self.file_path, "r", encoding="utf-8") as f:
            try:
                records: List[Dict[str, Any]] = json.load(f)
            except json.JSONDecodeError:
                logger.error(
                    f"Invalid JSON in {self.file_path}. Treating storage as empty."
                )
                return []
        logger.debug(f"Loaded {len(records)} records from {self.file_path}")
        return records

    def _write_records(self, records: List[Dict[str, Any]]) -> None:
        """Write all records back. Callers must hold the lock."""
        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
        logger.debug(f"Wrote {len(records)} records to {self.file_path}")

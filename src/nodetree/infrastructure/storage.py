"""
Key-value storage backends.

The persistence layer only needs a store that maps string keys to string
values. This module defines that capability and two implementations: an
in-memory store and a store kept in a single JSON file on disk.
"""

import json
from pathlib import Path
from typing import Optional, Protocol

from .logging_config import get_logger


logger = get_logger(__name__)


class KeyValueStore(Protocol):
    """Capability consumed by the persistence layer."""

    def get(self, key: str) -> Optional[str]:
        """Return the text stored under key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""
        ...


class MemoryStore:
    """
    Key-value store held in a dictionary.

    Useful for tests and for sessions that do not need to outlive the process.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._items


class JsonFileStore:
    """
    Key-value store backed by one JSON object file.

    Every key maps to a stored string. The file is re-read on each access so
    several store instances on the same path see each other's writes. Writes
    go through a temporary file that then replaces the store file.
    """

    def __init__(self, path: Path):
        """
        Initialize the store.

        Args:
            path: Path to the JSON file. It is created on the first write.
        """
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        """
        Read the whole store file.

        Returns:
            The stored mapping, empty if the file does not exist.

        Raises:
            json.JSONDecodeError: If the store file is corrupt.
        """
        if not self.path.exists():
            return {}

        with open(self.path, 'r', encoding='utf-8') as f:
            text = f.read()

        if not text.strip():
            return {}
        return json.loads(text)

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is None:
            logger.debug(f"Key {key!r} not found in {self.path}")
        return value

    def set(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Atomic write: write to temp file, then rename
        temp_file = self.path.with_suffix('.tmp')
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(items, f, indent=2, ensure_ascii=False)
        temp_file.replace(self.path)

        logger.debug(f"Stored key {key!r} in {self.path}")

"""
Abstract base class for storage backends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional
import threading


@dataclass
class StorageStats:
    """Statistics about storage."""

    reads: int = 0
    writes: int = 0
    misses: int = 0  # reads that found nothing stored
    bytes_written: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "reads": self.reads,
            "writes": self.writes,
            "misses": self.misses,
            "bytes_written": self.bytes_written,
        }


class BaseStorage(ABC):
    """
    Abstract base class for storage backends.

    A storage holds exactly one value and only ever replaces it whole:

    - ``read()`` returns the last written value, or None if nothing has
      been written yet. It must not raise merely because nothing exists.
    - ``write(value)`` replaces the stored value. Readers never observe a
      partially written value.
    """

    def __init__(self, **kwargs):
        self._lock = threading.RLock()
        self._reads = 0
        self._writes = 0
        self._misses = 0
        self._bytes_written = 0

    @abstractmethod
    def read(self) -> Optional[Any]:
        """
        Read the stored value.

        Returns:
            The last written value, or None if absent
        """
        pass

    @abstractmethod
    def write(self, value: Any) -> None:
        """
        Replace the stored value.

        Args:
            value: The complete new value
        """
        pass

    def stats(self) -> StorageStats:
        """Get storage statistics."""
        with self._lock:
            return StorageStats(
                reads=self._reads,
                writes=self._writes,
                misses=self._misses,
                bytes_written=self._bytes_written,
            )

    def _record_read(self, found: bool) -> None:
        with self._lock:
            self._reads += 1
            if not found:
                self._misses += 1

    def _record_write(self, size: int = 0) -> None:
        with self._lock:
            self._writes += 1
            self._bytes_written += size

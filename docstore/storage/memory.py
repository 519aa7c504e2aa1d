"""
In-memory storage backend.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from .base import BaseStorage


class MemoryStorage(BaseStorage):
    """
    In-memory storage.

    Fast but volatile - data is lost when the process exits.
    Use for:
    - Development and testing
    - Temporary data

    Values are deep-copied on the way in and out, so a stored value is
    never aliased by the caller, just as with a real persistent backend.

    Example:
        >>> storage = MemoryStorage()
        >>> storage.read() is None
        True
        >>> storage.write([{"id": 1}])
        >>> storage.read()
        [{'id': 1}]
    """

    def __init__(self, initial: Optional[Any] = None, **kwargs):
        """
        Initialize memory storage.

        Args:
            initial: Value to start with (None = nothing stored)
        """
        super().__init__(**kwargs)
        self._value = copy.deepcopy(initial)

    def read(self) -> Optional[Any]:
        """Read the stored value."""
        with self._lock:
            self._record_read(self._value is not None)
            return copy.deepcopy(self._value)

    def write(self, value: Any) -> None:
        """Replace the stored value."""
        with self._lock:
            self._value = copy.deepcopy(value)
            self._record_write()

    def __repr__(self) -> str:
        return f"MemoryStorage(empty={self._value is None})"

"""
Common interface of everything a Database can hold.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from ..storage.base import BaseStorage


class Store(ABC):
    """
    A unit of content persisted through one storage backend.

    Stores live in memory between ``read`` and ``write``; the Database
    drives these lifecycle calls across all of its stores.
    """

    def __init__(self, storage: BaseStorage):
        self.storage = storage

    def init(self) -> None:
        """Load initial content. Called once on startup."""
        self.read()

    @abstractmethod
    def read(self) -> None:
        """Replace in-memory content with the stored value."""
        pass

    @abstractmethod
    def write(self, force: bool = False) -> bool:
        """
        Persist in-memory content.

        Returns:
            True if the storage was written
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Reset content to empty and persist it."""
        pass

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """Get store description."""
        pass

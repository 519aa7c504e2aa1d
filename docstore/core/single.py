"""
Single-value store.
"""

from __future__ import annotations

import copy
from typing import Any, Dict

from .store import Store
from ..storage.base import BaseStorage


class Single(Store):
    """
    One value with a default, such as application settings.

    There is no change tracking: every ``write`` hits the storage.

    Example:
        >>> settings = Single(JSONFileStorage("settings.json"), {"theme": "light"})
        >>> settings.init()
        >>> settings.set_data({"theme": "dark"})
        >>> settings.write()
        True
    """

    def __init__(self, storage: BaseStorage, default: Any):
        super().__init__(storage)
        self.default = default
        self._data = copy.deepcopy(default)

    def read(self) -> None:
        """Load the stored value, falling back to the default."""
        data = self.storage.read()
        self._data = copy.deepcopy(self.default) if data is None else data

    def write(self, force: bool = False) -> bool:
        self.storage.write(self._data)
        return True

    def clear(self) -> None:
        """Reset to the default and write it."""
        self._data = copy.deepcopy(self.default)
        self.write()

    def get_data(self) -> Any:
        return self._data

    def set_data(self, data: Any) -> None:
        self._data = data

    def describe(self) -> Dict[str, Any]:
        return {
            "type": "single",
            "is_default": self._data == self.default,
        }

    def __repr__(self) -> str:
        return f"Single(storage={self.storage!r})"

"""
Key/value mapping storage backend.

Stores a JSON-encoded value under one key of any mutable mapping: a plain
``dict``, a ``shelve`` shelf, or a ``dbm`` database. Several stores can
share one mapping under different keys.
"""

from __future__ import annotations

from typing import Any, MutableMapping, Optional

from .base import BaseStorage
from .serialization import JSONConverter


class MappingStorage(BaseStorage):
    """
    JSON value stored under a key of a mutable mapping.

    Example:
        >>> import shelve
        >>> with shelve.open("app.db") as shelf:
        ...     storage = MappingStorage("settings", shelf)
        ...     storage.write({"theme": "dark"})
    """

    def __init__(
        self,
        key: str,
        mapping: MutableMapping,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._key = key
        self._mapping = mapping
        self._converter = JSONConverter(indent=None)

    @property
    def key(self) -> str:
        return self._key

    def read(self) -> Optional[Any]:
        with self._lock:
            data = self._mapping.get(self._key)
            self._record_read(data is not None)

        if data is None:
            return None

        if isinstance(data, bytes):
            # dbm hands back bytes
            data = data.decode("utf-8")

        return self._converter.parse(data)

    def write(self, value: Any) -> None:
        string = self._converter.stringify(value)
        with self._lock:
            self._mapping[self._key] = string
            self._record_write(len(string))

    def __repr__(self) -> str:
        return f"MappingStorage(key='{self._key}')"

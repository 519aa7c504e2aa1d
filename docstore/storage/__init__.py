"""
Storage backends for docstore.

Available Storage Backends:
    - MemoryStorage: In-memory storage (fast, volatile)
    - FileStorage / TextFileStorage: Raw bytes or text in one file
    - DataFileStorage: Structured data in one file through a converter
    - JSONFileStorage: JSON in one file
    - MsgPackFileStorage: MessagePack in one file
    - MappingStorage: JSON under one key of a dict, shelf or dbm

Example:
    >>> from docstore.storage import JSONFileStorage
    >>>
    >>> storage = JSONFileStorage("./data/users.json")
    >>> storage.write([{"id": 1, "name": "Ada"}])
    >>> storage.read()
    [{'id': 1, 'name': 'Ada'}]
"""

import os
from typing import Optional, Union

from .base import BaseStorage, StorageStats
from .memory import MemoryStorage
from .disk import (
    FileStorage,
    TextFileStorage,
    DataFileStorage,
    JSONFileStorage,
    MsgPackFileStorage,
)
from .mapping import MappingStorage
from .serialization import DataConverter, JSONConverter, pack, unpack

__all__ = [
    # Base
    "BaseStorage",
    "StorageStats",
    # Implementations
    "MemoryStorage",
    "FileStorage",
    "TextFileStorage",
    "DataFileStorage",
    "JSONFileStorage",
    "MsgPackFileStorage",
    "MappingStorage",
    # Serialization
    "DataConverter",
    "JSONConverter",
    "pack",
    "unpack",
    # Factory
    "create_storage",
    "STORAGE_EXTENSIONS",
]


# File extension used for each file-backed storage type
STORAGE_EXTENSIONS = {
    "text": ".txt",
    "json": ".json",
    "msgpack": ".msgpack",
}


def create_storage(
    storage_type: str,
    path: Optional[Union[str, os.PathLike]] = None,
    **kwargs
) -> BaseStorage:
    """
    Factory function to create storage backend.

    Args:
        storage_type: "memory", "text", "json" or "msgpack"
        path: File path for file-backed storage
        **kwargs: Storage-specific options

    Returns:
        Storage instance
    """
    storage_type = storage_type.lower()

    if storage_type == "memory":
        return MemoryStorage(**kwargs)

    if storage_type not in STORAGE_EXTENSIONS:
        raise ValueError(f"Unknown storage type: {storage_type}")

    if path is None:
        raise ValueError(f"path required for {storage_type} storage")

    if storage_type == "text":
        return TextFileStorage(path, **kwargs)
    elif storage_type == "json":
        return JSONFileStorage(path, **kwargs)
    else:
        return MsgPackFileStorage(path, **kwargs)

"""
docstore - An embedded document store with equality indexes.

Example:
    >>> from docstore import Collection, JSONFileStorage
    >>>
    >>> # Create a collection keyed on "id", indexed on "status"
    >>> tickets = Collection(JSONFileStorage("./data/tickets.json"), "id", ["status"])
    >>> tickets.read()
    >>>
    >>> # Add documents
    >>> tickets.create({"id": 1, "status": "open", "title": "Crash on start"})
    >>>
    >>> # Look up
    >>> tickets.find_by_indexed_field("status", "open")
    >>>
    >>> # Persist changes
    >>> tickets.write()
"""

from .core import (
    # Main classes
    Database,
    Collection,
    Single,
    Store,
    Document,
    # Exceptions
    DocStoreError,
    ConfigurationError,
    DocumentError,
    DuplicateKeyError,
    NotFoundError,
    ImmutableKeyError,
    UnknownIndexError,
    ValidationError,
    StorageError,
    SerializationError,
    DatabaseError,
    StoreNotFoundError,
    StoreExistsError,
)

from .storage import (
    BaseStorage,
    MemoryStorage,
    FileStorage,
    TextFileStorage,
    DataFileStorage,
    JSONFileStorage,
    MsgPackFileStorage,
    MappingStorage,
    create_storage,
)

__version__ = "0.1.0"
__author__ = "docstore Team"

__all__ = [
    # Main classes
    "Database",
    "Collection",
    "Single",
    "Store",
    "Document",
    # Exceptions
    "DocStoreError",
    "ConfigurationError",
    "DocumentError",
    "DuplicateKeyError",
    "NotFoundError",
    "ImmutableKeyError",
    "UnknownIndexError",
    "ValidationError",
    "StorageError",
    "SerializationError",
    "DatabaseError",
    "StoreNotFoundError",
    "StoreExistsError",
    # Storage
    "BaseStorage",
    "MemoryStorage",
    "FileStorage",
    "TextFileStorage",
    "DataFileStorage",
    "JSONFileStorage",
    "MsgPackFileStorage",
    "MappingStorage",
    "create_storage",
]

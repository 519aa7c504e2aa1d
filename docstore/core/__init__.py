"""
Core components for docstore.
"""

from .exceptions import (
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
from .store import Store
from .collection import Collection, Document
from .single import Single
from .database import Database

__all__ = [
    # Stores
    "Store",
    "Collection",
    "Document",
    "Single",
    # Database
    "Database",
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
]

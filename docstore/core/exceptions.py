"""
Custom exceptions for docstore.
"""


class DocStoreError(Exception):
    """Base exception for docstore."""
    pass


class ConfigurationError(DocStoreError):
    """Invalid collection configuration."""
    pass


class DocumentError(DocStoreError):
    """Error related to document operations."""
    pass


class DuplicateKeyError(DocumentError):
    """Document with given primary key already exists."""
    pass


class NotFoundError(DocumentError):
    """Document with given primary key not found."""
    pass


class ImmutableKeyError(DocumentError):
    """Attempt to change the primary key of a stored document."""
    pass


class UnknownIndexError(DocStoreError):
    """Lookup on a field that is not indexed."""
    pass


class ValidationError(DocStoreError):
    """Input validation error."""
    pass


class StorageError(DocStoreError):
    """Error related to storage operations."""
    pass


class SerializationError(StorageError):
    """Error during serialization/deserialization."""
    pass


class DatabaseError(DocStoreError):
    """Error related to database operations."""
    pass


class StoreNotFoundError(DatabaseError):
    """Store does not exist."""
    pass


class StoreExistsError(DatabaseError):
    """Store already exists."""
    pass

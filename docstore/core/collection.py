"""
Collection class for managing keyed documents.

A Collection is an ordered set of documents that share a primary key
field, with optional equality indexes on other fields. All operations
work in memory; the document set is read from and written to a single
storage backend as one value.
"""

from __future__ import annotations

import copy
import threading
from typing import (
    Dict,
    List,
    Optional,
    Any,
    Iterable,
    Iterator,
    Tuple,
    Union,
)

from .exceptions import (
    ConfigurationError,
    DuplicateKeyError,
    NotFoundError,
    ImmutableKeyError,
    UnknownIndexError,
    SerializationError,
    ValidationError,
)
from .store import Store
from ..storage.base import BaseStorage
from ..utils.validation import (
    validate_field,
    validate_fields,
    validate_document,
    validate_primary_key,
    make_hashable,
)
from ..utils.logging import get_logger


logger = get_logger(__name__)


Document = Dict[str, Any]

# bucket value -> primary keys, in the order they joined the bucket
Buckets = Dict[Any, Dict[Any, None]]

UPDATE_MODES = ("merge", "replace")


class Collection(Store):
    """
    A collection of documents identified by a primary key field.

    Maintains a primary index (key -> document) and one secondary index
    per indexed field (field value -> documents with that value). Both
    are kept exactly in sync with the document set by every operation.
    Mutations only touch memory and mark the collection dirty; ``write``
    persists the whole document set when something changed.

    Example:
        >>> tickets = Collection(JSONFileStorage("tickets.json"), "id", ["status"])
        >>> tickets.read()
        >>>
        >>> tickets.create({"id": 1, "status": "open"})
        >>> tickets.create({"id": 2, "status": "open"})
        >>> [t["id"] for t in tickets.find_by_indexed_field("status", "open")]
        [1, 2]
        >>>
        >>> tickets.update_by_primary_key(1, {"status": "closed"})
        >>> tickets.write()
        True
    """

    def __init__(
        self,
        storage: BaseStorage,
        primary_key_field: str,
        indexed_fields: Iterable[str] = (),
    ):
        """
        Initialize a new collection.

        No I/O happens here; call ``read`` (or ``init``) to load
        stored documents.

        Args:
            storage: Storage backend holding the document list
            primary_key_field: Field whose value uniquely identifies a document
            indexed_fields: Fields to build equality indexes on

        Raises:
            ConfigurationError: If the primary key field is also indexed
        """
        super().__init__(storage)

        primary_key_field = validate_field(primary_key_field)
        indexed_fields = validate_fields(indexed_fields)

        if primary_key_field in indexed_fields:
            raise ConfigurationError(
                f"Primary key field '{primary_key_field}' cannot be indexed"
            )

        self._primary_key_field = primary_key_field
        self._indexed_fields: Tuple[str, ...] = tuple(indexed_fields)

        # Primary index, in document set order
        self._documents: Dict[Any, Document] = {}

        # Secondary indexes hold primary keys only; documents live above
        self._indexes: Dict[str, Buckets] = {
            field: {} for field in self._indexed_fields
        }

        # Bucket each document currently occupies, per indexed field
        self._bucket_keys: Dict[Any, Tuple[Any, ...]] = {}

        self._dirty = False
        self._lock = threading.RLock()

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def primary_key_field(self) -> str:
        return self._primary_key_field

    @property
    def indexed_fields(self) -> List[str]:
        return list(self._indexed_fields)

    @property
    def is_dirty(self) -> bool:
        """Whether there are changes not yet written to storage."""
        return self._dirty

    def __len__(self) -> int:
        """Number of documents in collection."""
        return len(self._documents)

    def __contains__(self, primary_key: Any) -> bool:
        """Check if a document with this primary key exists."""
        try:
            return primary_key in self._documents
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Document]:
        """Iterate over a snapshot of the documents."""
        return iter(self.get_documents())

    # =========================================================================
    # PERSISTENCE
    # =========================================================================

    def read(self) -> None:
        """
        Load the document set from storage and rebuild all indexes.

        An absent stored value loads as an empty collection. Loading is
        not a change, so the dirty flag is left as it is.

        Raises:
            SerializationError: If the stored value is not a list of documents
        """
        data = self.storage.read()

        if data is None:
            data = []
        elif not isinstance(data, list):
            raise SerializationError(
                f"Expected a list of documents, got {type(data).__name__}"
            )

        try:
            state = self._build(data)
        except ValidationError as e:
            raise SerializationError(f"Invalid stored document: {e}") from e

        with self._lock:
            self._swap(state)

        logger.debug(f"Read {len(data)} documents from {self.storage!r}")

    def write(self, force: bool = False) -> bool:
        """
        Write the document set to storage.

        Skipped when nothing changed since the last write, unless forced.
        The dirty flag is cleared before the storage call and the document
        set is snapshotted at call time; changes made while the storage
        call runs mark the collection dirty again. If the storage call
        fails the flag stays cleared, so retry with ``force=True``.

        Args:
            force: Write even if nothing changed

        Returns:
            True if the storage was written
        """
        with self._lock:
            if not force and not self._dirty:
                return False

            self._dirty = False
            snapshot = copy.deepcopy(list(self._documents.values()))

        self.storage.write(snapshot)

        logger.debug(f"Wrote {len(snapshot)} documents to {self.storage!r}")
        return True

    def clear(self) -> None:
        """Remove all documents and write the empty collection."""
        self.set_documents([])
        self.write()

    # =========================================================================
    # BULK ACCESS
    # =========================================================================

    def get_documents(self) -> List[Document]:
        """
        Get all documents in document set order.

        The list is new but the documents are the stored ones; change
        them through ``update_by_primary_key`` to keep indexes in sync.
        """
        with self._lock:
            return list(self._documents.values())

    def set_documents(self, documents: Iterable[Document]) -> None:
        """
        Replace the whole document set.

        Primary keys are expected to be unique and are not checked the
        way ``create`` checks them: if a key repeats, the last document
        with that key wins. Indexes are rebuilt from scratch either way.

        Args:
            documents: The new documents, in order

        Raises:
            ValidationError: If a document is malformed (nothing is replaced)
        """
        state = self._build(documents)

        with self._lock:
            self._swap(state)
            self._dirty = True

    # =========================================================================
    # CRUD OPERATIONS
    # =========================================================================

    def create(self, document: Document) -> Any:
        """
        Add a new document.

        Args:
            document: The document; stored as is, not copied

        Returns:
            The document's primary key

        Raises:
            DuplicateKeyError: If the primary key is already used
            ValidationError: If the document is malformed
        """
        primary_key = self._primary_key_of(document)
        keys = self._bucket_keys_of(document)

        with self._lock:
            if primary_key in self._documents:
                raise DuplicateKeyError(
                    f"Primary key {primary_key!r} already exists"
                )

            self._insert(
                primary_key,
                document,
                keys,
                self._documents,
                self._indexes,
                self._bucket_keys,
            )
            self._dirty = True

        return primary_key

    def find_by_primary_key(self, primary_key: Any) -> Optional[Document]:
        """
        Get a document by primary key.

        Returns:
            The document, or None if not found
        """
        with self._lock:
            try:
                return self._documents.get(primary_key)
            except TypeError:
                # Unhashable keys can't be stored
                return None

    def find_by_indexed_field(self, field: str, value: Any) -> List[Document]:
        """
        Get all documents whose indexed field equals a value.

        Args:
            field: An indexed field
            value: Value to match

        Returns:
            Matching documents in the order they joined the bucket

        Raises:
            UnknownIndexError: If the field is not indexed
        """
        with self._lock:
            buckets = self._indexes.get(field)
            if buckets is None:
                raise UnknownIndexError(f"Index for field '{field}' not found")

            bucket = buckets.get(self._hashable(value), {})
            return [self._documents[pk] for pk in bucket]

    def update_by_primary_key(
        self,
        primary_key: Any,
        document: Document,
        mode: str = "merge",
    ) -> None:
        """
        Update an existing document in place.

        The stored document object is kept, so references to it stay
        valid. Its primary key cannot change; model that as delete plus
        create.

        Args:
            primary_key: Key of the document to update
            document: New field values; may omit the primary key field
            mode: "merge" (update given fields) or "replace" (drop all
                other fields)

        Raises:
            NotFoundError: If no document has this primary key
            ImmutableKeyError: If the document carries a different key
            ValidationError: If the document or mode is invalid
        """
        if mode not in UPDATE_MODES:
            raise ValidationError(
                f"Unknown update mode '{mode}', expected one of {UPDATE_MODES}"
            )
        validate_document(document)

        pk_field = self._primary_key_field

        with self._lock:
            current = self.find_by_primary_key(primary_key)
            if current is None:
                raise NotFoundError(
                    f"Document with primary key {primary_key!r} not found"
                )

            if pk_field in document and document[pk_field] != primary_key:
                raise ImmutableKeyError(
                    f"Primary key {primary_key!r} cannot be updated "
                    f"(got {document[pk_field]!r})"
                )

            if mode == "merge":
                updated = {**current, **document}
            else:
                updated = dict(document)
                updated[pk_field] = current[pk_field]

            old_keys = self._bucket_keys[primary_key]
            new_keys = self._bucket_keys_of(updated)

            # Remove from the old bucket, then append to the new one
            for field, old_key, new_key in zip(
                self._indexed_fields, old_keys, new_keys
            ):
                if old_key == new_key:
                    continue
                buckets = self._indexes[field]
                self._discard(buckets, old_key, primary_key)
                buckets.setdefault(new_key, {})[primary_key] = None

            self._bucket_keys[primary_key] = new_keys

            if mode == "replace":
                current.clear()
            current.update(updated)

            self._dirty = True

    def delete_by_primary_key(
        self,
        primary_keys: Union[Any, List[Any]],
    ) -> int:
        """
        Delete one or more documents.

        Keys that don't exist are ignored.

        Args:
            primary_keys: A single key, or a list/set of keys. Tuples
                count as a single key.

        Returns:
            Number of documents deleted
        """
        if isinstance(primary_keys, (list, set, frozenset)):
            batch = primary_keys
        else:
            batch = [primary_keys]

        keys: Dict[Any, None] = {}
        for primary_key in batch:
            try:
                keys[primary_key] = None
            except TypeError:
                # Unhashable keys can't be stored
                continue

        deleted = 0

        with self._lock:
            for primary_key in keys:
                document = self.find_by_primary_key(primary_key)
                if document is None:
                    continue

                del self._documents[primary_key]
                bucket_keys = self._bucket_keys.pop(primary_key)

                for field, key in zip(self._indexed_fields, bucket_keys):
                    self._discard(self._indexes[field], key, primary_key)

                deleted += 1

            if deleted:
                self._dirty = True

        return deleted

    # =========================================================================
    # INDEXING
    # =========================================================================

    def _primary_key_of(self, document: Document) -> Any:
        validate_document(document)

        if self._primary_key_field not in document:
            raise ValidationError(
                f"Document is missing primary key field "
                f"'{self._primary_key_field}'"
            )

        return validate_primary_key(document[self._primary_key_field])

    def _bucket_keys_of(self, document: Document) -> Tuple[Any, ...]:
        """Bucket key of a document in each index; missing fields map to None."""
        return tuple(
            self._hashable(document.get(field))
            for field in self._indexed_fields
        )

    @staticmethod
    def _hashable(value: Any) -> Any:
        try:
            key = make_hashable(value)
            hash(key)
        except TypeError as e:
            raise ValidationError(
                f"Indexed value of type {type(value).__name__} is not hashable"
            ) from e
        return key

    @staticmethod
    def _discard(buckets: Buckets, key: Any, primary_key: Any) -> None:
        """Remove a primary key from a bucket, dropping the bucket if empty."""
        bucket = buckets.get(key)
        if bucket is None:
            return

        bucket.pop(primary_key, None)
        if not bucket:
            del buckets[key]

    def _insert(
        self,
        primary_key: Any,
        document: Document,
        keys: Tuple[Any, ...],
        documents: Dict[Any, Document],
        indexes: Dict[str, Buckets],
        bucket_keys: Dict[Any, Tuple[Any, ...]],
    ) -> None:
        documents[primary_key] = document
        bucket_keys[primary_key] = keys

        for field, key in zip(self._indexed_fields, keys):
            indexes[field].setdefault(key, {})[primary_key] = None

    def _build(self, documents: Iterable[Document]) -> tuple:
        """
        Build the primary and secondary indexes for a document set.

        Runs in one pass over the documents and touches no state, so a
        malformed document leaves the collection unchanged.
        """
        new_documents: Dict[Any, Document] = {}
        new_indexes: Dict[str, Buckets] = {
            field: {} for field in self._indexed_fields
        }
        new_bucket_keys: Dict[Any, Tuple[Any, ...]] = {}
        duplicates = 0

        for document in documents:
            primary_key = self._primary_key_of(document)
            keys = self._bucket_keys_of(document)

            if primary_key in new_documents:
                duplicates += 1
                # Last one wins; take the loser out of its buckets first
                for field, key in zip(
                    self._indexed_fields, new_bucket_keys[primary_key]
                ):
                    self._discard(new_indexes[field], key, primary_key)

            self._insert(
                primary_key,
                document,
                keys,
                new_documents,
                new_indexes,
                new_bucket_keys,
            )

        if duplicates:
            logger.warning(
                f"Bulk load contained {duplicates} duplicate primary keys "
                f"on field '{self._primary_key_field}'; kept the last of each"
            )

        return new_documents, new_indexes, new_bucket_keys

    def _swap(self, state: tuple) -> None:
        self._documents, self._indexes, self._bucket_keys = state

    # =========================================================================
    # STATISTICS & INFO
    # =========================================================================

    def describe(self) -> Dict[str, Any]:
        """Get collection description."""
        with self._lock:
            return {
                "type": "collection",
                "document_count": len(self._documents),
                "primary_key_field": self._primary_key_field,
                "indexed_fields": {
                    field: len(self._indexes[field])
                    for field in self._indexed_fields
                },
                "dirty": self._dirty,
            }

    def __repr__(self) -> str:
        return (
            f"Collection(primary_key_field='{self._primary_key_field}', "
            f"indexed_fields={list(self._indexed_fields)}, "
            f"count={len(self)})"
        )

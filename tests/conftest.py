"""
Pytest fixtures for docstore tests.
"""

import shutil
import tempfile
from typing import Any, Dict, List

import pytest

from docstore.core.collection import Collection
from docstore.storage import MemoryStorage


@pytest.fixture
def temp_dir():
    """Create a temporary directory for file-backed storage."""
    path = tempfile.mkdtemp(prefix="docstore_test_")
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def sample_tickets() -> List[Dict[str, Any]]:
    """Create sample ticket documents."""
    return [
        {
            "id": i,
            "status": ["open", "closed", "pending"][i % 3],
            "owner": f"user_{i % 4}",
            "title": f"Ticket {i}",
        }
        for i in range(30)
    ]


@pytest.fixture
def collection(memory_storage: MemoryStorage) -> Collection:
    """Empty collection keyed on id, indexed on status and owner."""
    return Collection(memory_storage, "id", ["status", "owner"])


@pytest.fixture
def check_indexes():
    """Index consistency checker, see assert_indexes_consistent."""
    return assert_indexes_consistent


def assert_indexes_consistent(collection: Collection) -> None:
    """
    Check every index against a brute-force scan of the document set.

    Every document must be in exactly the bucket matching its current
    field value, and buckets must contain nothing else.
    """
    documents = collection.get_documents()
    keys = [d[collection.primary_key_field] for d in documents]

    assert len(keys) == len(set(keys))
    for key, document in zip(keys, documents):
        assert collection.find_by_primary_key(key) is document

    for field in collection.indexed_fields:
        values = {repr(d.get(field)): d.get(field) for d in documents}
        for value in values.values():
            expected = [d for d in documents if d.get(field) == value]
            found = collection.find_by_indexed_field(field, value)
            assert sorted(id(d) for d in found) == sorted(id(d) for d in expected)
            assert len(found) == len(expected)

        bucket_total = collection.describe()["indexed_fields"][field]
        assert bucket_total == len(values)

"""
Example usage of docstore storage backends.
"""

import shelve
import shutil
import tempfile
import time
from pathlib import Path

from docstore import Collection
from docstore.storage import (
    JSONFileStorage,
    MappingStorage,
    MemoryStorage,
    MsgPackFileStorage,
    create_storage,
)


def fill(collection, n_documents):
    for i in range(n_documents):
        collection.create({
            "id": i,
            "kind": ["note", "task", "event"][i % 3],
            "body": f"document number {i}",
        })


def main():
    print("=" * 60)
    print("Storage Backend Examples")
    print("=" * 60)

    n_documents = 10000
    temp_dir = Path(tempfile.mkdtemp(prefix="docstore_storage_"))

    try:
        # =========================================================================
        # Memory Storage
        # =========================================================================
        print("\n" + "=" * 60)
        print("1. Memory Storage")
        print("=" * 60)

        memory_storage = MemoryStorage()
        collection = Collection(memory_storage, "id", ["kind"])
        fill(collection, n_documents)
        collection.write()
        print(f"   Stored {len(collection)} documents")
        print(f"   Stats: {memory_storage.stats().to_dict()}")

        # =========================================================================
        # File Storage
        # =========================================================================
        print("\n" + "=" * 60)
        print("2. File Storage (JSON vs MessagePack)")
        print("=" * 60)

        for storage in (
            JSONFileStorage(temp_dir / "docs.json"),
            MsgPackFileStorage(temp_dir / "docs.msgpack"),
        ):
            collection = Collection(storage, "id", ["kind"])
            fill(collection, n_documents)

            start = time.time()
            collection.write()
            write_time = time.time() - start

            reloaded = Collection(storage, "id", ["kind"])
            start = time.time()
            reloaded.read()
            read_time = time.time() - start

            size_kb = storage.path.stat().st_size / 1024
            print(f"   {type(storage).__name__}:")
            print(f"     Write: {write_time * 1000:.1f}ms, Read: {read_time * 1000:.1f}ms")
            print(f"     File size: {size_kb:.1f} KB")
            print(f"     Tasks after reload: {len(reloaded.find_by_indexed_field('kind', 'task'))}")

        # =========================================================================
        # Mapping Storage
        # =========================================================================
        print("\n" + "=" * 60)
        print("3. Mapping Storage (shelve)")
        print("=" * 60)

        with shelve.open(str(temp_dir / "shelf")) as shelf:
            collection = Collection(MappingStorage("docs", shelf), "id")
            collection.create({"id": 1, "body": "kept in a shelf"})
            collection.write()
            print(f"   Keys in shelf: {list(shelf.keys())}")

        # =========================================================================
        # Factory
        # =========================================================================
        print("\n" + "=" * 60)
        print("4. Storage Factory")
        print("=" * 60)

        for storage_type in ("memory", "text", "json", "msgpack"):
            path = None if storage_type == "memory" else temp_dir / f"factory_{storage_type}"
            print(f"   {storage_type}: {create_storage(storage_type, path)!r}")

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    print("\n" + "=" * 60)
    print("Done!")


if __name__ == "__main__":
    main()

"""
Basic usage example for docstore.
"""

import tempfile
from pathlib import Path

from docstore import (
    Collection,
    Database,
    DuplicateKeyError,
    JSONFileStorage,
    Single,
)


def main():
    print("=" * 60)
    print("docstore Basic Usage Example")
    print("=" * 60)

    data_dir = Path(tempfile.mkdtemp(prefix="docstore_example_"))

    # 1. Create database
    print("\n1. Creating database...")
    db = Database({
        "tickets": Collection(
            JSONFileStorage(data_dir / "tickets.json"), "id", ["status", "owner"]
        ),
        "settings": Single(JSONFileStorage(data_dir / "settings.json"), {"theme": "light"}),
    })
    db.init()
    print(f"   Created: {db}")

    tickets = db["tickets"]

    # 2. Add documents
    print("\n2. Adding documents...")
    for i in range(1, 11):
        tickets.create({
            "id": i,
            "title": f"Ticket {i}",
            "status": ["open", "pending", "closed"][i % 3],
            "owner": ["ada", "grace"][i % 2],
        })
    print(f"   Total in collection: {len(tickets)}")

    try:
        tickets.create({"id": 1, "title": "Again"})
    except DuplicateKeyError as e:
        print(f"   Rejected duplicate: {e}")

    # 3. Lookups
    print("\n3. Looking up...")
    print(f"   Ticket 3: {tickets.find_by_primary_key(3)}")
    open_ids = [t["id"] for t in tickets.find_by_indexed_field("status", "open")]
    print(f"   Open tickets: {open_ids}")

    # 4. Update
    print("\n4. Updating...")
    tickets.update_by_primary_key(3, {"status": "open", "owner": "grace"})
    open_ids = [t["id"] for t in tickets.find_by_indexed_field("status", "open")]
    print(f"   Open tickets after update: {open_ids}")

    # 5. Delete
    print("\n5. Deleting...")
    deleted = tickets.delete_by_primary_key([1, 2, 99])
    print(f"   Deleted {deleted} tickets, {len(tickets)} left")

    # 6. Persist
    print("\n6. Writing...")
    db["settings"].set_data({"theme": "dark"})
    db.write()
    print(f"   Files: {sorted(p.name for p in data_dir.iterdir())}")

    # 7. Reload
    print("\n7. Reloading...")
    reloaded = Collection(JSONFileStorage(data_dir / "tickets.json"), "id", ["status"])
    reloaded.read()
    print(f"   Reloaded {len(reloaded)} tickets")
    print(f"   Description: {reloaded.describe()}")

    print("\n" + "=" * 60)
    print("Done!")


if __name__ == "__main__":
    main()

"""
Integration tests for Database over file storage built from config.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from config import Settings, StorageSettings
from docstore.core.collection import Collection
from docstore.core.database import Database
from docstore.core.single import Single

from . import integration, slow


def build_database(settings: Settings) -> Database:
    """Wire up the stores of a small ticket tracker."""
    return Database(
        {
            "tickets": Collection(
                settings.create_storage("tickets"), "id", ["status", "assignee"]
            ),
            "users": Collection(settings.create_storage("users"), "login"),
            "settings": Single(settings.create_storage("settings"), {"next_id": 1}),
        },
        max_workers=settings.max_workers,
    )


@integration
@pytest.mark.parametrize("fmt", ["json", "msgpack"])
class TestDatabaseRestart:
    """Test a full application lifecycle across restarts."""

    def test_lifecycle(self, temp_dir, fmt):
        """Test init, edit, write, restart."""
        settings = Settings(storage=StorageSettings(data_dir=temp_dir, format=fmt))

        db = build_database(settings)
        db.init()

        db["users"].create({"login": "ada"})
        counter = db["settings"]
        for title in ("Crash", "Typo", "Slow"):
            next_id = counter.get_data()["next_id"]
            db["tickets"].create({"id": next_id, "title": title, "status": "open", "assignee": "ada"})
            counter.set_data({"next_id": next_id + 1})
        db["tickets"].update_by_primary_key(2, {"status": "closed"})
        db.write()

        files = sorted(p.name for p in Path(temp_dir).iterdir())
        assert files == sorted(f"{n}.{fmt}" for n in ("tickets", "users", "settings"))

        # Restart
        db = build_database(settings)
        db.init()

        assert db["settings"].get_data() == {"next_id": 4}
        assert [t["id"] for t in db["tickets"].find_by_indexed_field("status", "open")] == [1, 3]
        assert len(db["tickets"].find_by_indexed_field("assignee", "ada")) == 3
        assert db["users"].find_by_primary_key("ada") == {"login": "ada"}

    def test_clear(self, temp_dir, fmt):
        """Test that clear empties every file."""
        settings = Settings(storage=StorageSettings(data_dir=temp_dir, format=fmt))
        db = build_database(settings)
        db.init()
        db["tickets"].create({"id": 1, "status": "open"})
        db["settings"].set_data({"next_id": 2})
        db.write()

        db.clear()

        db = build_database(settings)
        db.init()
        assert len(db["tickets"]) == 0
        assert db["settings"].get_data() == {"next_id": 1}


@integration
class TestConcurrentAccess:
    """Test threads sharing one collection."""

    @slow
    def test_parallel_creates(self, temp_dir, check_indexes):
        """Test that concurrent creates keep indexes exact."""
        settings = Settings(storage=StorageSettings(data_dir=temp_dir))
        db = build_database(settings)
        db.init()
        tickets = db["tickets"]

        def create_range(start):
            for i in range(start, start + 100):
                tickets.create({"id": i, "status": ["open", "closed"][i % 2], "assignee": f"u{i % 7}"})
                if i % 10 == 0:
                    tickets.delete_by_primary_key(i)

        with ThreadPoolExecutor(max_workers=5) as executor:
            list(executor.map(create_range, range(0, 500, 100)))

        assert len(tickets) == 450
        check_indexes(tickets)

        db.write()
        db = build_database(settings)
        db.init()
        assert len(db["tickets"]) == 450

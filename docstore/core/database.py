"""
Database - groups named stores and drives their lifecycle together.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .store import Store
from .exceptions import StoreExistsError, StoreNotFoundError
from ..utils.validation import validate_name
from ..utils.logging import get_logger


logger = get_logger(__name__)


class Database:
    """
    Main entry point: a named set of stores (Collections and Singles).

    ``init``, ``read``, ``write`` and ``clear`` run on every store at
    once in a thread pool. Stores are independent of each other; there
    is no ordering or atomicity across them.

    Example:
        >>> db = Database({
        ...     "users": Collection(JSONFileStorage("data/users.json"), "id", ["email"]),
        ...     "settings": Single(JSONFileStorage("data/settings.json"), {}),
        ... })
        >>> db.init()
        >>>
        >>> db["users"].create({"id": 1, "email": "ada@example.com"})
        >>>
        >>> # Persist everything that changed
        >>> db.write()
    """

    def __init__(
        self,
        stores: Optional[Mapping[str, Store]] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize Database.

        Args:
            stores: Stores by name
            max_workers: Thread pool size for fan-out calls
                (None = one thread per store)
        """
        self._stores: Dict[str, Store] = {}
        self._max_workers = max_workers
        self._lock = threading.RLock()

        for name, store in (stores or {}).items():
            self.add(name, store)

    # =========================================================================
    # STORE MANAGEMENT
    # =========================================================================

    def add(self, name: str, store: Store, exist_ok: bool = False) -> Store:
        """
        Register a store under a name.

        Args:
            name: Store name
            store: The store
            exist_ok: If True, return the existing store instead of failing

        Returns:
            The registered store

        Raises:
            StoreExistsError: If the name is taken and exist_ok=False
        """
        name = validate_name(name)

        with self._lock:
            if name in self._stores:
                if exist_ok:
                    return self._stores[name]
                raise StoreExistsError(f"Store '{name}' already exists")

            self._stores[name] = store
            logger.debug(f"Added store '{name}': {store!r}")
            return store

    def get(self, name: str) -> Store:
        """
        Get a store by name.

        Raises:
            StoreNotFoundError: If no store has this name
        """
        with self._lock:
            if name not in self._stores:
                raise StoreNotFoundError(f"Store '{name}' not found")
            return self._stores[name]

    def remove(self, name: str) -> bool:
        """
        Unregister a store. Its stored data is left alone.

        Returns:
            True if removed, False if not found
        """
        with self._lock:
            if name not in self._stores:
                return False
            del self._stores[name]
            logger.debug(f"Removed store '{name}'")
            return True

    def names(self) -> List[str]:
        """List all store names."""
        with self._lock:
            return list(self._stores.keys())

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def init(self) -> None:
        """Load every store for the first time."""
        self._fan_out("init")
        logger.info(f"Database initialized ({len(self)} stores)")

    def read(self) -> None:
        """Reload every store from storage."""
        self._fan_out("read")

    def write(self, force: bool = False) -> None:
        """
        Persist every store.

        Args:
            force: Write collections even if they have no changes
        """
        self._fan_out("write", force)

    def clear(self) -> None:
        """Empty every store and persist the result."""
        self._fan_out("clear")
        logger.info(f"Database cleared ({len(self)} stores)")

    def _fan_out(self, method: str, *args: Any) -> None:
        """
        Call a method on all stores concurrently.

        Waits for every call to finish. Failures are logged per store and
        the first one is re-raised.
        """
        with self._lock:
            stores = dict(self._stores)

        if not stores:
            return

        errors: List[BaseException] = []

        with ThreadPoolExecutor(
            max_workers=self._max_workers or len(stores)
        ) as executor:
            futures = {
                executor.submit(getattr(store, method), *args): name
                for name, store in stores.items()
            }

            for future in as_completed(futures):
                name = futures[future]
                error = future.exception()
                if error is not None:
                    logger.error(f"{method} failed for store '{name}': {error}")
                    errors.append(error)

        if errors:
            raise errors[0]

    # =========================================================================
    # DATABASE INFO
    # =========================================================================

    def info(self) -> Dict[str, Any]:
        """Get a description of every store."""
        with self._lock:
            return {
                "store_count": len(self._stores),
                "stores": {
                    name: store.describe()
                    for name, store in self._stores.items()
                },
            }

    def __repr__(self) -> str:
        return f"Database(stores={self.names()})"

    # =========================================================================
    # CONTEXT MANAGER
    # =========================================================================

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *args) -> None:
        self.write()

    # =========================================================================
    # STORE ACCESS SHORTCUTS
    # =========================================================================

    def __getitem__(self, name: str) -> Store:
        """
        Get store by name using indexing.

        Example:
            >>> users = db["users"]
        """
        return self.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._stores

    def __iter__(self) -> Iterator[str]:
        """Iterate over store names."""
        return iter(self.names())

    def __len__(self) -> int:
        """Number of stores."""
        return len(self._stores)

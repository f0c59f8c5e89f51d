"""Store factory for the persistence layer.

Environment-based store selection:
- .env (runtime): STORE_BACKEND=mongodb (production persistence)
- tests: STORE_BACKEND=inmemory (fast, isolated)
- Default: inmemory

There is no process-wide store: every call returns a new instance and
the caller (the container) owns it.

Usage:
    from infrastructure.persistence.factory import create_store

    store = create_store()
"""

from typing import Optional

from domain.shared.ports.store import IStore, UniqueFields
from domain.user.services.registry import USER_UNIQUE_FIELDS, USERS_TABLE
from infrastructure.config import get_mongodb_uri, get_store_backend
from infrastructure.persistence.in_memory.store import InMemoryStore

DEFAULT_UNIQUE_FIELDS: UniqueFields = {USERS_TABLE: USER_UNIQUE_FIELDS}


def create_store(
    backend: Optional[str] = None,
    unique_fields: Optional[UniqueFields] = None,
) -> IStore:
    """Create a store based on STORE_BACKEND.

    Args:
        backend: Overrides STORE_BACKEND ("inmemory" or "mongodb")
        unique_fields: Overrides the default unique constraints

    Returns:
        IStore: New store instance

    Raises:
        ValueError: Unknown backend, or mongodb selected without MONGODB_URI
    """
    mode = (backend or get_store_backend()).lower()
    constraints = DEFAULT_UNIQUE_FIELDS if unique_fields is None else unique_fields

    if mode == "inmemory":
        return InMemoryStore(unique_fields=constraints)

    if mode == "mongodb":
        if not get_mongodb_uri():
            raise ValueError(
                "STORE_BACKEND=mongodb but MONGODB_URI not set. "
                "Set MONGODB_URI in .env or use STORE_BACKEND=inmemory"
            )
        # Imported lazily so the in-memory path never needs a Mongo driver
        from infrastructure.persistence.mongodb.store import MongoStore

        return MongoStore(unique_fields=constraints)

    raise ValueError(f"Unknown STORE_BACKEND: {mode!r} (expected 'inmemory' or 'mongodb')")

"""In-memory store implementation.

Provides an in-memory implementation of the IStore port for tests and
local runs. Tables are insertion-ordered lists of plain dicts.
"""

import asyncio
from copy import deepcopy
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from domain.shared.ports.store import (
    Criteria,
    DuplicateRecordError,
    IStore,
    Record,
    UniqueFields,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Tables = Dict[str, List[Record]]


def _matches(record: Record, criteria: Criteria) -> bool:
    return all(record.get(field) == value for field, value in criteria.items())


class _TableSet:
    """Unlocked table operations shared by the store and its transactions."""

    def __init__(self, unique_fields: UniqueFields) -> None:
        self.tables: Tables = {}
        self.unique_fields = unique_fields

    def insert(self, table: str, record: Record) -> str:
        rows = self.tables.setdefault(table, [])
        self._check_unique(table, rows, record, skip=None)
        rows.append(deepcopy(record))
        return str(record["id"])

    def select(self, table: str, criteria: Criteria) -> List[Record]:
        return [deepcopy(r) for r in self.tables.get(table, []) if _matches(r, criteria)]

    def update(self, table: str, criteria: Criteria, patch: Record) -> int:
        rows = self.tables.get(table, [])
        targets = [r for r in rows if _matches(r, criteria)]
        for row in targets:
            self._check_unique(table, rows, patch, skip=row)
        for row in targets:
            row.update(deepcopy(patch))
        return len(targets)

    def delete(self, table: str, criteria: Criteria) -> int:
        rows = self.tables.get(table, [])
        kept = [r for r in rows if not _matches(r, criteria)]
        self.tables[table] = kept
        return len(rows) - len(kept)

    def snapshot(self) -> Tables:
        return deepcopy(self.tables)

    def restore(self, snapshot: Tables) -> None:
        self.tables = snapshot

    def _check_unique(
        self,
        table: str,
        rows: List[Record],
        values: Record,
        skip: Optional[Record],
    ) -> None:
        for field in self.unique_fields.get(table, ()):
            if field not in values:
                continue
            value = values[field]
            for row in rows:
                if row is not skip and row.get(field) == value:
                    raise DuplicateRecordError(table, field, value)


class InMemoryStore:
    """
    In-memory implementation of IStore port.

    Concurrency: one asyncio.Lock serializes every top-level operation and
    every transaction, so a transaction never interleaves with other
    writers. A failed transaction restores the snapshot taken when it
    started.
    Persistence: data lost on process restart.

    Example:
        >>> store = InMemoryStore(unique_fields={"users": ("username", "email")})
        >>> await store.insert("meals", {"id": "m1", "session_token": "t1"})
        'm1'
        >>> await store.select_where("meals", {"session_token": "t1"})
        [{'id': 'm1', 'session_token': 't1'}]
    """

    def __init__(self, unique_fields: Optional[UniqueFields] = None) -> None:
        """
        Initialize store with empty tables.

        Args:
            unique_fields: Table -> fields that must hold unique values
        """
        self._tables = _TableSet(dict(unique_fields or {}))
        self._lock = asyncio.Lock()

    async def insert(self, table: str, record: Record) -> str:
        async with self._lock:
            return self._tables.insert(table, record)

    async def select_where(self, table: str, criteria: Criteria) -> List[Record]:
        async with self._lock:
            return self._tables.select(table, criteria)

    async def select_one_where(self, table: str, criteria: Criteria) -> Optional[Record]:
        rows = await self.select_where(table, criteria)
        return rows[0] if rows else None

    async def update_where(self, table: str, criteria: Criteria, patch: Record) -> int:
        async with self._lock:
            return self._tables.update(table, criteria, patch)

    async def delete_where(self, table: str, criteria: Criteria) -> int:
        async with self._lock:
            return self._tables.delete(table, criteria)

    async def with_transaction(self, fn: Callable[[IStore], Awaitable[T]]) -> T:
        """Run fn against a transaction view; roll back if it raises."""
        async with self._lock:
            snapshot = self._tables.snapshot()
            try:
                return await fn(_InMemoryTransaction(self._tables))
            except Exception:
                self._tables.restore(snapshot)
                logger.warning("In-memory transaction rolled back", exc_info=True)
                raise

    def count(self, table: str) -> int:
        """Number of records in table (test helper)."""
        return len(self._tables.tables.get(table, []))

    def clear(self) -> None:
        """Drop every table (test helper)."""
        self._tables.restore({})


class _InMemoryTransaction:
    """Store view handed to a transaction body; the lock is already held."""

    def __init__(self, tables: _TableSet) -> None:
        self._tables = tables

    async def insert(self, table: str, record: Record) -> str:
        return self._tables.insert(table, record)

    async def select_where(self, table: str, criteria: Criteria) -> List[Record]:
        return self._tables.select(table, criteria)

    async def select_one_where(self, table: str, criteria: Criteria) -> Optional[Record]:
        rows = self._tables.select(table, criteria)
        return rows[0] if rows else None

    async def update_where(self, table: str, criteria: Criteria, patch: Record) -> int:
        return self._tables.update(table, criteria, patch)

    async def delete_where(self, table: str, criteria: Criteria) -> int:
        return self._tables.delete(table, criteria)

    async def with_transaction(self, fn: Callable[[IStore], Awaitable[Any]]) -> Any:
        # Nested transactions join the enclosing one
        return await fn(self)

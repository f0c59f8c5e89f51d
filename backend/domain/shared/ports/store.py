"""Persistent store port (interface).

Generic table store consumed by the ledger, the registry and the
session identity manager. The domain defines the contract, the
infrastructure layer provides the adapters (in-memory, MongoDB).

Records are plain dicts. Criteria are equality matches on fields:
``{"session_token": token, "id": meal_id}`` selects records whose
``session_token`` and ``id`` both match.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Sequence, TypeVar

Record = Dict[str, Any]
Criteria = Dict[str, Any]

# Table name -> fields whose values must be unique within the table
UniqueFields = Dict[str, Sequence[str]]

T = TypeVar("T")


class DuplicateRecordError(Exception):
    """Raised by adapters when a write violates a unique field."""

    def __init__(self, table: str, field: str, value: Any):
        """Initialize with the violated constraint.

        Args:
            table: Table written to
            field: Unique field that collided
            value: Colliding value
        """
        self.table = table
        self.field = field
        self.value = value
        super().__init__(f"Duplicate {table}.{field}: {value}")


class IStore(Protocol):
    """
    Interface for table-oriented persistence.

    Ordering contract: ``select_where`` returns records in insertion
    order. Update keeps a record's position.

    Example usage (domain layer):
        >>> class MealLedger:
        ...     def __init__(self, store: IStore):
        ...         self._store = store
        ...
        ...     async def list(self, token: str) -> List[Meal]:
        ...         rows = await self._store.select_where(
        ...             "meals", {"session_token": token}
        ...         )
        ...         return [Meal.from_record(r) for r in rows]
    """

    async def insert(self, table: str, record: Record) -> str:
        """
        Insert a record.

        Args:
            table: Table (collection) name
            record: Record to insert, must carry an ``id`` field

        Returns:
            The record id

        Raises:
            DuplicateRecordError: If a unique field collides
        """
        ...

    async def select_where(self, table: str, criteria: Criteria) -> List[Record]:
        """
        Select every record matching criteria, in insertion order.

        Args:
            table: Table name
            criteria: Equality criteria

        Returns:
            Copies of matching records (empty list if none)
        """
        ...

    async def select_one_where(self, table: str, criteria: Criteria) -> Optional[Record]:
        """
        Select the first record matching criteria.

        Returns:
            Copy of the record, or None
        """
        ...

    async def update_where(self, table: str, criteria: Criteria, patch: Record) -> int:
        """
        Apply patch to every record matching criteria.

        Returns:
            Number of affected records
        """
        ...

    async def delete_where(self, table: str, criteria: Criteria) -> int:
        """
        Delete every record matching criteria.

        Returns:
            Number of deleted records
        """
        ...

    async def with_transaction(self, fn: Callable[["IStore"], Awaitable[T]]) -> T:
        """
        Run fn atomically.

        fn receives a store bound to the transaction and must issue all
        its statements through it. If fn raises, no statement takes
        effect and the exception propagates.

        Example:
            >>> async def move(tx: IStore) -> int:
            ...     moved = await tx.update_where("meals", {"session_token": old}, patch)
            ...     await tx.update_where("users", {"session_token": old}, patch)
            ...     return moved
            >>> await store.with_transaction(move)
        """
        ...

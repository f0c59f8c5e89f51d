"""Meal ledger - session-scoped CRUD over meals.

Every operation takes the caller's session token and only ever sees
meals stamped with exactly that token.
"""

from datetime import datetime, timezone
import logging
from typing import Callable, List, Union
from uuid import UUID

from domain.meal.core.entities.meal import Meal, MealFields
from domain.meal.core.exceptions.domain_errors import MealNotFoundError
from domain.session.token import SessionToken
from domain.shared.ports.store import IStore

logger = logging.getLogger(__name__)

MEALS_TABLE = "meals"

MealIdLike = Union[UUID, str]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_meal_id(meal_id: MealIdLike) -> str:
    """Canonical string form of meal_id, or MealNotFoundError if malformed."""
    if isinstance(meal_id, UUID):
        return str(meal_id)
    try:
        return str(UUID(str(meal_id)))
    except ValueError:
        raise MealNotFoundError(str(meal_id)) from None


class MealLedger:
    """
    Domain service: meal records scoped by session token.

    Also a token owner: on login the identity manager asks it to move
    every meal of the old token to the new one.

    Example:
        >>> ledger = MealLedger(store)
        >>> meal = await ledger.create(token, fields)
        >>> [m.id for m in await ledger.list(token)] == [meal.id]
        True
    """

    owner_name = "meals"

    def __init__(self, store: IStore, clock: Callable[[], datetime] = _utc_now) -> None:
        """
        Initialize ledger.

        Args:
            store: Persistent store port
            clock: Source of "now" for timestamps
        """
        self._store = store
        self._clock = clock

    async def create(self, token: SessionToken, fields: MealFields) -> Meal:
        """
        Create a meal owned by token.

        Args:
            token: Owning session token
            fields: Validated meal fields

        Returns:
            The stored meal
        """
        meal = Meal.create(fields, session_token=str(token), now=self._clock())
        await self._store.insert(MEALS_TABLE, meal.to_record())

        logger.debug("Meal stored", extra={"meal_id": str(meal.id), "token": repr(token)})
        return meal

    async def list(self, token: SessionToken) -> List[Meal]:
        """
        List meals owned by token in creation order.

        The order is the store's insertion order and is what the streak
        computation relies on; it is never re-sorted by date.
        """
        records = await self._store.select_where(MEALS_TABLE, {"session_token": str(token)})
        return [Meal.from_record(r) for r in records]

    async def get_by_id(self, token: SessionToken, meal_id: MealIdLike) -> Meal:
        """
        Get one meal owned by token.

        Raises:
            MealNotFoundError: Absent, owned by another token, or malformed id
        """
        key = _parse_meal_id(meal_id)
        record = await self._store.select_one_where(
            MEALS_TABLE, {"id": key, "session_token": str(token)}
        )
        if record is None:
            raise MealNotFoundError(key)
        return Meal.from_record(record)

    async def update(self, token: SessionToken, meal_id: MealIdLike, fields: MealFields) -> Meal:
        """
        Replace every mutable field of a meal owned by token.

        id and created_at are preserved; updated_at is refreshed.

        Raises:
            MealNotFoundError: Absent, not owned, or deleted concurrently
        """
        current = await self.get_by_id(token, meal_id)
        updated = current.with_fields(fields, now=self._clock())

        affected = await self._store.update_where(
            MEALS_TABLE,
            {"id": str(current.id), "session_token": str(token)},
            {
                "name": updated.name,
                "description": updated.description,
                "in_diet": updated.in_diet,
                "date": updated.date,
                "updated_at": updated.updated_at,
            },
        )
        if affected == 0:
            # Lost a race with a concurrent delete
            raise MealNotFoundError(str(current.id))

        return updated

    async def delete(self, token: SessionToken, meal_id: MealIdLike) -> None:
        """
        Delete a meal owned by token.

        Raises:
            MealNotFoundError: Absent or not owned (including a repeated delete)
        """
        key = _parse_meal_id(meal_id)
        deleted = await self._store.delete_where(
            MEALS_TABLE, {"id": key, "session_token": str(token)}
        )
        if deleted == 0:
            raise MealNotFoundError(key)

    async def restamp(
        self,
        store: IStore,
        old_token: SessionToken,
        new_token: SessionToken,
        at: datetime,
    ) -> int:
        """Move every meal of old_token to new_token."""
        return await store.update_where(
            MEALS_TABLE,
            {"session_token": str(old_token)},
            {"session_token": str(new_token), "updated_at": at},
        )

    async def owns(self, store: IStore, token: SessionToken) -> bool:
        record = await store.select_one_where(MEALS_TABLE, {"session_token": str(token)})
        return record is not None

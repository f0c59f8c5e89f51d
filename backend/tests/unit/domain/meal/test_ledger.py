"""Unit tests for MealLedger.

Tests focus on:
- Session scoping (another token sees nothing)
- Creation order of list
- Full-replace update semantics
- NotFound on absent, foreign, malformed and already-deleted ids
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Iterator
from uuid import uuid4

import pytest

from domain.meal.core.exceptions.domain_errors import MealNotFoundError
from domain.meal.services.ledger import MEALS_TABLE, MealLedger
from domain.session.token import SessionToken
from domain.shared.errors import NotFoundError
from infrastructure.persistence.in_memory.store import InMemoryStore

TOKEN_A = SessionToken("aaaaaaaa-0000-4000-8000-000000000000")
TOKEN_B = SessionToken("bbbbbbbb-0000-4000-8000-000000000000")


def ticking_clock(start: datetime) -> Iterator[datetime]:
    current = start
    while True:
        yield current
        current += timedelta(seconds=1)


@pytest.fixture
def clocked_ledger(store: InMemoryStore) -> MealLedger:
    ticks = ticking_clock(datetime(2024, 5, 1, tzinfo=timezone.utc))
    return MealLedger(store, clock=lambda: next(ticks))


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_stamps_token(self, ledger: MealLedger, make_fields: Any) -> None:
        meal = await ledger.create(TOKEN_A, make_fields())

        assert meal.session_token == str(TOKEN_A)
        assert meal.created_at == meal.updated_at

    @pytest.mark.asyncio
    async def test_create_persists(
        self, ledger: MealLedger, store: InMemoryStore, make_fields: Any
    ) -> None:
        await ledger.create(TOKEN_A, make_fields())
        assert store.count(MEALS_TABLE) == 1

    @pytest.mark.asyncio
    async def test_fresh_ids(self, ledger: MealLedger, make_fields: Any) -> None:
        first = await ledger.create(TOKEN_A, make_fields())
        second = await ledger.create(TOKEN_A, make_fields())
        assert first.id != second.id


class TestList:
    @pytest.mark.asyncio
    async def test_creation_order_not_date_order(
        self, ledger: MealLedger, make_fields: Any
    ) -> None:
        late = await ledger.create(TOKEN_A, make_fields(date=datetime(2024, 6, 1)))
        early = await ledger.create(TOKEN_A, make_fields(date=datetime(2024, 1, 1)))

        meals = await ledger.list(TOKEN_A)

        assert [m.id for m in meals] == [late.id, early.id]

    @pytest.mark.asyncio
    async def test_scoped_to_token(self, ledger: MealLedger, make_fields: Any) -> None:
        await ledger.create(TOKEN_A, make_fields(name="Mine"))
        await ledger.create(TOKEN_B, make_fields(name="Theirs"))

        assert [m.name for m in await ledger.list(TOKEN_A)] == ["Mine"]
        assert [m.name for m in await ledger.list(TOKEN_B)] == ["Theirs"]

    @pytest.mark.asyncio
    async def test_unknown_token_lists_nothing(self, ledger: MealLedger) -> None:
        assert await ledger.list(SessionToken("nobody")) == []

    @pytest.mark.asyncio
    async def test_update_keeps_position(self, ledger: MealLedger, make_fields: Any) -> None:
        first = await ledger.create(TOKEN_A, make_fields(name="First"))
        second = await ledger.create(TOKEN_A, make_fields(name="Second"))

        await ledger.update(TOKEN_A, first.id, make_fields(name="First again"))

        assert [m.id for m in await ledger.list(TOKEN_A)] == [first.id, second.id]


class TestGetById:
    @pytest.mark.asyncio
    async def test_get_own_meal(self, ledger: MealLedger, make_fields: Any) -> None:
        meal = await ledger.create(TOKEN_A, make_fields())
        assert await ledger.get_by_id(TOKEN_A, meal.id) == meal

    @pytest.mark.asyncio
    async def test_accepts_string_id(self, ledger: MealLedger, make_fields: Any) -> None:
        meal = await ledger.create(TOKEN_A, make_fields())
        assert (await ledger.get_by_id(TOKEN_A, str(meal.id))).id == meal.id

    @pytest.mark.asyncio
    async def test_foreign_meal_is_not_found(self, ledger: MealLedger, make_fields: Any) -> None:
        meal = await ledger.create(TOKEN_A, make_fields())

        with pytest.raises(MealNotFoundError):
            await ledger.get_by_id(TOKEN_B, meal.id)

    @pytest.mark.asyncio
    async def test_absent_meal_is_not_found(self, ledger: MealLedger) -> None:
        with pytest.raises(MealNotFoundError):
            await ledger.get_by_id(TOKEN_A, uuid4())

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, ledger: MealLedger) -> None:
        with pytest.raises(NotFoundError):
            await ledger.get_by_id(TOKEN_A, "not-a-uuid")


class TestUpdate:
    @pytest.mark.asyncio
    async def test_full_replace(self, clocked_ledger: MealLedger, make_fields: Any) -> None:
        meal = await clocked_ledger.create(TOKEN_A, make_fields())
        new_date = datetime(2024, 5, 2, 19, 30, tzinfo=timezone.utc)

        updated = await clocked_ledger.update(
            TOKEN_A,
            meal.id,
            make_fields(name="Dinner", description="Pasta", in_diet=False, date=new_date),
        )

        assert updated.id == meal.id
        assert updated.created_at == meal.created_at
        assert updated.updated_at > meal.updated_at
        assert (updated.name, updated.description, updated.in_diet, updated.date) == (
            "Dinner",
            "Pasta",
            False,
            new_date,
        )
        assert await clocked_ledger.get_by_id(TOKEN_A, meal.id) == updated

    @pytest.mark.asyncio
    async def test_foreign_update_is_not_found(self, ledger: MealLedger, make_fields: Any) -> None:
        meal = await ledger.create(TOKEN_A, make_fields())

        with pytest.raises(MealNotFoundError):
            await ledger.update(TOKEN_B, meal.id, make_fields(name="Hijack"))

        assert (await ledger.get_by_id(TOKEN_A, meal.id)).name == "Breakfast"


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_own_meal(self, ledger: MealLedger, make_fields: Any) -> None:
        meal = await ledger.create(TOKEN_A, make_fields())

        await ledger.delete(TOKEN_A, meal.id)

        assert await ledger.list(TOKEN_A) == []

    @pytest.mark.asyncio
    async def test_second_delete_is_not_found(self, ledger: MealLedger, make_fields: Any) -> None:
        meal = await ledger.create(TOKEN_A, make_fields())
        await ledger.delete(TOKEN_A, meal.id)

        with pytest.raises(MealNotFoundError):
            await ledger.delete(TOKEN_A, meal.id)

    @pytest.mark.asyncio
    async def test_foreign_delete_leaves_meal(self, ledger: MealLedger, make_fields: Any) -> None:
        meal = await ledger.create(TOKEN_A, make_fields())

        with pytest.raises(MealNotFoundError):
            await ledger.delete(TOKEN_B, meal.id)

        assert len(await ledger.list(TOKEN_A)) == 1


class TestTokenOwner:
    @pytest.mark.asyncio
    async def test_restamp_moves_every_meal(
        self, ledger: MealLedger, store: InMemoryStore, make_fields: Any
    ) -> None:
        await ledger.create(TOKEN_A, make_fields())
        await ledger.create(TOKEN_A, make_fields())
        at = datetime(2030, 1, 1, tzinfo=timezone.utc)

        moved = await ledger.restamp(store, TOKEN_A, TOKEN_B, at)

        assert moved == 2
        assert await ledger.list(TOKEN_A) == []
        assert all(m.updated_at == at for m in await ledger.list(TOKEN_B))

    @pytest.mark.asyncio
    async def test_owns(self, ledger: MealLedger, store: InMemoryStore, make_fields: Any) -> None:
        await ledger.create(TOKEN_A, make_fields())

        assert await ledger.owns(store, TOKEN_A) is True
        assert await ledger.owns(store, TOKEN_B) is False

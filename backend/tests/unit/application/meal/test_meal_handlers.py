"""Unit tests for meal command and query handlers.

Handlers are exercised through the wired container so the ledger, the
identity manager and the event bus are the real ones.
"""

from typing import Any

import pytest

from application.meal.commands import CreateMealCommand, DeleteMealCommand, UpdateMealCommand
from application.meal.queries import GetAdherenceSummaryQuery, GetMealQuery, ListMealsQuery
from domain.meal.core.events import MealCreated, MealDeleted, MealUpdated
from domain.meal.core.exceptions.domain_errors import MealNotFoundError
from domain.shared.errors import UnauthenticatedError
from infrastructure.container import Container


async def create(container: Container, make_fields: Any, token: Any = None, **overrides: Any) -> Any:
    return await container.create_meal.handle(
        CreateMealCommand(session_token=token, fields=make_fields(**overrides))
    )


class TestCreateMeal:
    @pytest.mark.asyncio
    async def test_mints_token_for_new_visitor(self, container: Container, make_fields: Any) -> None:
        result = await create(container, make_fields)

        assert result.token_is_new is True
        assert result.meal.session_token == str(result.token)

    @pytest.mark.asyncio
    async def test_reuses_presented_token(self, container: Container, make_fields: Any) -> None:
        result = await create(container, make_fields, token="visitor")

        assert result.token_is_new is False
        assert result.meal.session_token == "visitor"

    @pytest.mark.asyncio
    async def test_publishes_meal_created(
        self, container: Container, event_bus: Any, make_fields: Any
    ) -> None:
        result = await create(container, make_fields, token="visitor-token", in_diet=False)

        events = event_bus.of_type(MealCreated)
        assert len(events) == 1
        assert events[0].meal_id == result.meal.id
        assert events[0].in_diet is False
        assert events[0].session_prefix == "visitor-"


class TestUpdateMeal:
    @pytest.mark.asyncio
    async def test_reports_changed_fields(
        self, container: Container, event_bus: Any, make_fields: Any
    ) -> None:
        created = await create(container, make_fields, token="t")

        updated = await container.update_meal.handle(
            UpdateMealCommand(
                session_token="t",
                meal_id=str(created.meal.id),
                fields=make_fields(name="Lunch", in_diet=False),
            )
        )

        assert updated.id == created.meal.id
        assert event_bus.of_type(MealUpdated)[0].changed_fields == ["name", "in_diet"]

    @pytest.mark.asyncio
    async def test_requires_token(self, container: Container, make_fields: Any) -> None:
        created = await create(container, make_fields, token="t")

        with pytest.raises(UnauthenticatedError):
            await container.update_meal.handle(
                UpdateMealCommand(session_token=None, meal_id=str(created.meal.id), fields=make_fields())
            )

    @pytest.mark.asyncio
    async def test_foreign_meal(self, container: Container, event_bus: Any, make_fields: Any) -> None:
        created = await create(container, make_fields, token="owner")

        with pytest.raises(MealNotFoundError):
            await container.update_meal.handle(
                UpdateMealCommand(session_token="intruder", meal_id=str(created.meal.id), fields=make_fields())
            )
        assert event_bus.of_type(MealUpdated) == []


class TestDeleteMeal:
    @pytest.mark.asyncio
    async def test_delete_then_not_found(
        self, container: Container, event_bus: Any, make_fields: Any
    ) -> None:
        created = await create(container, make_fields, token="t")
        command = DeleteMealCommand(session_token="t", meal_id=str(created.meal.id))

        await container.delete_meal.handle(command)
        with pytest.raises(MealNotFoundError):
            await container.delete_meal.handle(command)

        assert len(event_bus.of_type(MealDeleted)) == 1


class TestMealQueries:
    @pytest.mark.asyncio
    async def test_get_and_list(self, container: Container, make_fields: Any) -> None:
        first = await create(container, make_fields, token="t", name="First")
        await create(container, make_fields, token="t", name="Second")
        await create(container, make_fields, token="other", name="Hidden")

        meal = await container.get_meal.handle(GetMealQuery(session_token="t", meal_id=str(first.meal.id)))
        meals = await container.list_meals.handle(ListMealsQuery(session_token="t"))

        assert meal.name == "First"
        assert [m.name for m in meals] == ["First", "Second"]

    @pytest.mark.asyncio
    async def test_list_requires_token(self, container: Container) -> None:
        with pytest.raises(UnauthenticatedError):
            await container.list_meals.handle(ListMealsQuery(session_token=None))

    @pytest.mark.asyncio
    async def test_adherence_summary(self, container: Container, make_fields: Any) -> None:
        for flag in (True, True, False, True):
            await create(container, make_fields, token="t", in_diet=flag)

        summary = await container.get_adherence_summary.handle(GetAdherenceSummaryQuery(session_token="t"))

        assert (summary.total, summary.total_in_diet, summary.total_out_diet, summary.best_sequence) == (
            4,
            3,
            1,
            2,
        )

    @pytest.mark.asyncio
    async def test_adherence_summary_can_require_records(self, container: Container) -> None:
        with pytest.raises(UnauthenticatedError):
            await container.get_adherence_summary.handle(
                GetAdherenceSummaryQuery(session_token="empty", must_own_records=True)
            )

"""CQRS Queries for the meal ledger."""

from application.meal.queries.get_meal import (
    GetMealQuery,
    GetMealQueryHandler,
)
from application.meal.queries.list_meals import (
    ListMealsQuery,
    ListMealsQueryHandler,
)
from application.meal.queries.get_adherence_summary import (
    GetAdherenceSummaryQuery,
    GetAdherenceSummaryQueryHandler,
)

__all__ = [
    "GetMealQuery",
    "GetMealQueryHandler",
    "ListMealsQuery",
    "ListMealsQueryHandler",
    "GetAdherenceSummaryQuery",
    "GetAdherenceSummaryQueryHandler",
]

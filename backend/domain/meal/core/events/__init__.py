"""Domain events for the meal ledger."""

from .meal_created import MealCreated
from .meal_deleted import MealDeleted
from .meal_updated import MealUpdated

__all__ = [
    "MealCreated",
    "MealDeleted",
    "MealUpdated",
]

"""Core entities for meal domain."""

from .meal import Meal, MealFields

__all__ = ["Meal", "MealFields"]

"""Domain exceptions for the Meal bounded context."""

from domain.meal.core.exceptions.domain_errors import MealNotFoundError

__all__ = ["MealNotFoundError"]

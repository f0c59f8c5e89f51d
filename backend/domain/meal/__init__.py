"""Meal domain - meal ledger and diet adherence.

Meals belong to a session token, not to a user. The ledger scopes every
read and write by token; the adherence aggregator summarizes a token's
meals in creation order.
"""

from domain.meal.core.entities.meal import Meal, MealFields
from domain.meal.core.exceptions.domain_errors import MealNotFoundError
from domain.meal.services.adherence import AdherenceSummary, summarize_adherence
from domain.meal.services.ledger import MealLedger

__all__ = [
    "Meal",
    "MealFields",
    "MealNotFoundError",
    "MealLedger",
    "AdherenceSummary",
    "summarize_adherence",
]

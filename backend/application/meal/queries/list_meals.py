"""List meals query - every meal of the session in creation order."""

from dataclasses import dataclass
from typing import List, Optional

from domain.meal.core.entities.meal import Meal
from domain.meal.services.ledger import MealLedger
from domain.session.identity_manager import SessionIdentityManager


@dataclass(frozen=True)
class ListMealsQuery:
    """Query: List the session's meals."""

    session_token: Optional[str]


class ListMealsQueryHandler:
    """Handler for ListMealsQuery."""

    def __init__(self, identity: SessionIdentityManager, ledger: MealLedger):
        self._identity = identity
        self._ledger = ledger

    async def handle(self, query: ListMealsQuery) -> List[Meal]:
        """
        Raises:
            UnauthenticatedError: No session token
        """
        token = await self._identity.require_token(query.session_token)
        return await self._ledger.list(token)

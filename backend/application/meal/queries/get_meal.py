"""Get meal query - retrieve single meal by ID."""

from dataclasses import dataclass
from typing import Optional
import logging

from domain.meal.core.entities.meal import Meal
from domain.meal.services.ledger import MealLedger
from domain.session.identity_manager import SessionIdentityManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetMealQuery:
    """
    Query: Get single meal by ID.

    Attributes:
        session_token: Token carried by the request
        meal_id: Meal ID to retrieve (raw path value)
    """

    session_token: Optional[str]
    meal_id: str


class GetMealQueryHandler:
    """Handler for GetMealQuery."""

    def __init__(self, identity: SessionIdentityManager, ledger: MealLedger):
        self._identity = identity
        self._ledger = ledger

    async def handle(self, query: GetMealQuery) -> Meal:
        """
        Execute query and return the meal if the session owns it.

        Raises:
            UnauthenticatedError: No session token
            MealNotFoundError: Absent or owned by another session

        Example:
            >>> handler = GetMealQueryHandler(identity, ledger)
            >>> meal = await handler.handle(GetMealQuery(session_token=token, meal_id=meal_id))
            >>> meal.session_token == token
            True
        """
        token = await self._identity.require_token(query.session_token)
        meal = await self._ledger.get_by_id(token, query.meal_id)

        logger.debug("Meal retrieved", extra={"meal_id": str(meal.id)})
        return meal

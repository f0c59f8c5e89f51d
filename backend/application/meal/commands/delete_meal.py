"""Delete meal command and handler.

Hard delete: a second delete of the same id fails with NotFound.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from domain.meal.core.events.meal_deleted import MealDeleted
from domain.meal.services.ledger import MealLedger
from domain.session.identity_manager import SessionIdentityManager
from domain.shared.ports.event_bus import IEventBus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteMealCommand:
    """
    Command: Delete meal.

    Attributes:
        session_token: Token carried by the request
        meal_id: Meal to delete (raw path value)
    """

    session_token: Optional[str]
    meal_id: str


class DeleteMealCommandHandler:
    """Handler for DeleteMealCommand."""

    def __init__(
        self,
        identity: SessionIdentityManager,
        ledger: MealLedger,
        event_bus: IEventBus,
    ):
        self._identity = identity
        self._ledger = ledger
        self._event_bus = event_bus

    async def handle(self, command: DeleteMealCommand) -> None:
        """
        Execute delete command.

        Raises:
            UnauthenticatedError: No session token
            MealNotFoundError: Absent or owned by another session
        """
        token = await self._identity.require_token(command.session_token)

        meal = await self._ledger.get_by_id(token, command.meal_id)
        await self._ledger.delete(token, meal.id)

        logger.info("Meal deleted", extra={"meal_id": str(meal.id)})

        await self._event_bus.publish(MealDeleted.create(meal_id=meal.id, session_token=str(token)))

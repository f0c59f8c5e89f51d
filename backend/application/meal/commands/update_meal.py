"""Update meal command and handler.

Full replace of name, description, in_diet and date.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging

from domain.meal.core.entities.meal import Meal, MealFields
from domain.meal.core.events.meal_updated import MealUpdated
from domain.meal.services.ledger import MealLedger
from domain.session.identity_manager import SessionIdentityManager
from domain.shared.ports.event_bus import IEventBus

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("name", "description", "in_diet", "date")


@dataclass(frozen=True)
class UpdateMealCommand:
    """
    Command: Replace a meal's fields.

    Attributes:
        session_token: Token carried by the request
        meal_id: Meal to update (raw path value)
        fields: Complete replacement fields
    """

    session_token: Optional[str]
    meal_id: str
    fields: MealFields


class UpdateMealCommandHandler:
    """Handler for UpdateMealCommand."""

    def __init__(
        self,
        identity: SessionIdentityManager,
        ledger: MealLedger,
        event_bus: IEventBus,
    ):
        self._identity = identity
        self._ledger = ledger
        self._event_bus = event_bus

    async def handle(self, command: UpdateMealCommand) -> Meal:
        """
        Execute update command.

        Flow:
        1. Require a session token
        2. Load the current meal (ownership check)
        3. Replace its fields
        4. Publish MealUpdated with the fields that actually changed

        Returns:
            Updated Meal (same id and created_at)

        Raises:
            UnauthenticatedError: No session token
            MealNotFoundError: Absent or owned by another session
        """
        token = await self._identity.require_token(command.session_token)

        before = await self._ledger.get_by_id(token, command.meal_id)
        updated = await self._ledger.update(token, before.id, command.fields)

        changed: List[str] = [
            field for field in MUTABLE_FIELDS if getattr(before, field) != getattr(updated, field)
        ]

        logger.info(
            "Meal updated",
            extra={"meal_id": str(updated.id), "changed_fields": changed},
        )

        await self._event_bus.publish(
            MealUpdated.create(meal_id=updated.id, session_token=str(token), changed_fields=changed)
        )

        return updated

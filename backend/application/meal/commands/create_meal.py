"""Create meal command and handler."""

from dataclasses import dataclass
from typing import Optional
import logging

from domain.meal.core.entities.meal import Meal, MealFields
from domain.meal.core.events.meal_created import MealCreated
from domain.meal.services.ledger import MealLedger
from domain.session.identity_manager import SessionIdentityManager
from domain.session.token import SessionToken
from domain.shared.ports.event_bus import IEventBus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateMealCommand:
    """
    Command: Log a new meal.

    Attributes:
        session_token: Token carried by the request (None for a new visitor)
        fields: Validated meal fields
    """

    session_token: Optional[str]
    fields: MealFields


@dataclass(frozen=True)
class CreateMealResult:
    """
    Created meal plus the token it belongs to.

    token_is_new tells the transport to hand the token back to the client.
    """

    meal: Meal
    token: SessionToken
    token_is_new: bool


class CreateMealCommandHandler:
    """Handler for CreateMealCommand."""

    def __init__(
        self,
        identity: SessionIdentityManager,
        ledger: MealLedger,
        event_bus: IEventBus,
    ):
        """
        Initialize handler.

        Args:
            identity: Session identity manager (mints tokens)
            ledger: Meal ledger
            event_bus: Event bus port
        """
        self._identity = identity
        self._ledger = ledger
        self._event_bus = event_bus

    async def handle(self, command: CreateMealCommand) -> CreateMealResult:
        """
        Execute create command.

        Flow:
        1. Reuse the presented token or mint one
        2. Store the meal under that token
        3. Publish MealCreated event

        Returns:
            CreateMealResult
        """
        token, is_new = self._identity.ensure_token(command.session_token)

        meal = await self._ledger.create(token, command.fields)

        logger.info(
            "Meal created",
            extra={"meal_id": str(meal.id), "token_minted": is_new},
        )

        await self._event_bus.publish(
            MealCreated.create(meal_id=meal.id, session_token=str(token), in_diet=meal.in_diet)
        )

        return CreateMealResult(meal=meal, token=token, token_is_new=is_new)

"""MealCreated domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID, uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class MealCreated(DomainEvent):
    """Domain event: a meal has been logged.

    Attributes:
        meal_id: ID of the new meal.
        session_prefix: First characters of the owning token.
        in_diet: Whether the meal is in diet.
    """

    meal_id: UUID
    session_prefix: str
    in_diet: bool

    @classmethod
    def create(cls, meal_id: UUID, session_token: str, in_diet: bool) -> "MealCreated":
        """Create new MealCreated event."""
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            meal_id=meal_id,
            session_prefix=session_token[:8],
            in_diet=in_diet,
        )

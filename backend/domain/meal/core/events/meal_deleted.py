"""MealDeleted domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID, uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class MealDeleted(DomainEvent):
    """Domain event: a meal has been removed.

    Deletion is physical; a second delete of the same id fails.

    Attributes:
        meal_id: ID of the deleted meal.
        session_prefix: First characters of the owning token.
    """

    meal_id: UUID
    session_prefix: str

    @classmethod
    def create(cls, meal_id: UUID, session_token: str) -> "MealDeleted":
        """Create new MealDeleted event."""
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            meal_id=meal_id,
            session_prefix=session_token[:8],
        )

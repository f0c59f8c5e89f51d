"""MealUpdated domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class MealUpdated(DomainEvent):
    """Domain event: a meal has been replaced.

    Attributes:
        meal_id: ID of the updated meal.
        session_prefix: First characters of the owning token.
        changed_fields: Fields whose value actually changed (may be empty,
            an update is a full replace even when nothing differs).
    """

    meal_id: UUID
    session_prefix: str
    changed_fields: List[str]

    @classmethod
    def create(
        cls,
        meal_id: UUID,
        session_token: str,
        changed_fields: List[str],
    ) -> "MealUpdated":
        """Create new MealUpdated event."""
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            meal_id=meal_id,
            session_prefix=session_token[:8],
            changed_fields=list(changed_fields),
        )

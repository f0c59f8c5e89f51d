"""Logging subscribers for meal ledger events.

Side effects only: they never modify system state.
"""

import logging

from domain.meal.core.events.meal_created import MealCreated
from domain.meal.core.events.meal_deleted import MealDeleted
from domain.meal.core.events.meal_updated import MealUpdated

logger = logging.getLogger(__name__)


class MealEventLogger:
    """Structured log line per meal event.

    Example:
        >>> handlers = MealEventLogger()
        >>> event_bus.subscribe(MealCreated, handlers.on_created)
    """

    async def on_created(self, event: MealCreated) -> None:
        logger.info(
            "meal_created",
            extra={
                "event_type": "MealCreated",
                "event_id": str(event.event_id),
                "occurred_at": event.occurred_at.isoformat(),
                "meal_id": str(event.meal_id),
                "session": event.session_prefix,
                "in_diet": event.in_diet,
            },
        )

    async def on_updated(self, event: MealUpdated) -> None:
        logger.info(
            "meal_updated",
            extra={
                "event_type": "MealUpdated",
                "event_id": str(event.event_id),
                "occurred_at": event.occurred_at.isoformat(),
                "meal_id": str(event.meal_id),
                "session": event.session_prefix,
                "changed_fields": list(event.changed_fields),
            },
        )

    async def on_deleted(self, event: MealDeleted) -> None:
        logger.info(
            "meal_deleted",
            extra={
                "event_type": "MealDeleted",
                "event_id": str(event.event_id),
                "occurred_at": event.occurred_at.isoformat(),
                "meal_id": str(event.meal_id),
                "session": event.session_prefix,
            },
        )

"""User registered event handler."""

from dataclasses import dataclass
import logging

from domain.user.core.events.user_registered import UserRegistered

logger = logging.getLogger(__name__)


@dataclass
class UserRegisteredHandler:
    """Handler for UserRegistered domain event.

    Examples:
        >>> handler = UserRegisteredHandler()
        >>> event_bus.subscribe(UserRegistered, handler.handle)
    """

    async def handle(self, event: UserRegistered) -> None:
        logger.info(
            "user_registered",
            extra={
                "event_id": str(event.event_id),
                "user_id": str(event.user_id),
                "username": event.username,
                "token_minted": event.token_minted,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )

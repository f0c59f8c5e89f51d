"""Session reassigned event handler."""

from dataclasses import dataclass
import logging

from domain.session.events import SessionReassigned

logger = logging.getLogger(__name__)


@dataclass
class SessionReassignedHandler:
    """Handler for SessionReassigned domain event.

    Only token prefixes reach the log.
    """

    async def handle(self, event: SessionReassigned) -> None:
        """Handle SessionReassigned event.

        Args:
            event: SessionReassigned domain event
        """
        logger.info(
            "session_reassigned",
            extra={
                "event_id": str(event.event_id),
                "user_id": event.user_id,
                "old_session": event.old_token_prefix,
                "new_session": event.new_token_prefix,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )

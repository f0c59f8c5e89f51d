"""SessionReassigned domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class SessionReassigned(DomainEvent):
    """Domain event: records moved to a freshly minted session token.

    Raised after a successful login once the re-stamp transaction has
    committed. Only token prefixes are carried, never full tokens.

    Attributes:
        user_id: User that logged in.
        old_token_prefix: First characters of the retired token.
        new_token_prefix: First characters of the new token.
    """

    user_id: str
    old_token_prefix: str
    new_token_prefix: str

    @classmethod
    def create(cls, user_id: str, old_token: str, new_token: str) -> "SessionReassigned":
        """Create new SessionReassigned event."""
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            user_id=user_id,
            old_token_prefix=old_token[:8],
            new_token_prefix=new_token[:8],
        )

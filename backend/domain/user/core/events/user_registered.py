"""UserRegistered domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID, uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class UserRegistered(DomainEvent):
    """Domain event: a user account was created and bound to a session.

    Attributes:
        user_id: ID of the new user.
        username: Normalized username.
        token_minted: True when registration had to mint a session token.
    """

    user_id: UUID
    username: str
    token_minted: bool

    @classmethod
    def create(cls, user_id: UUID, username: str, token_minted: bool) -> "UserRegistered":
        """Create new UserRegistered event."""
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            user_id=user_id,
            username=username,
            token_minted=token_minted,
        )

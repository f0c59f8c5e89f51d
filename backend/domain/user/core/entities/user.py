"""User entity - aggregate root."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4

from domain.user.core.value_objects.email import Email
from domain.user.core.value_objects.username import Username


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class User:
    """User aggregate root.

    A registered identity bound to the session token it currently owns.
    The token changes on every login; id, username and email do not.

    Invariants:
    - username is lower-case letters and dashes, unique
    - email is lower-case, unique
    - password_hash is a salted hash, never the plaintext
    - updated_at is never before created_at

    Examples:
        >>> user = User.create(
        ...     Username("tiago"),
        ...     Email("tiago@gmail.com"),
        ...     password_hash="$pbkdf2-sha256$...",
        ...     session_token="5c1e...",
        ...     now=datetime.now(timezone.utc),
        ... )
        >>> user.username
        'tiago'
    """

    id: UUID
    username: str
    email: str
    password_hash: str
    session_token: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.updated_at < self.created_at:
            raise ValueError(
                f"updated_at cannot be before created_at: {self.updated_at} < {self.created_at}"
            )

    @staticmethod
    def create(
        username: Username,
        email: Email,
        password_hash: str,
        session_token: str,
        now: datetime,
    ) -> "User":
        """Factory method to create a new user.

        Args:
            username: Validated username
            email: Validated email
            password_hash: Output of the password hasher
            session_token: Token the user is bound to
            now: Creation timestamp (UTC)

        Returns:
            New User instance
        """
        return User(
            id=uuid4(),
            username=username.value,
            email=email.value,
            password_hash=password_hash,
            session_token=session_token,
            created_at=now,
            updated_at=now,
        )

    def public(self) -> Dict[str, str]:
        """Fields safe to show to the session owner."""
        return {"id": str(self.id), "username": self.username, "email": self.email}

    def to_record(self) -> Dict[str, Any]:
        """Serialize to a store record."""
        return {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "password_hash": self.password_hash,
            "session_token": self.session_token,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @staticmethod
    def from_record(record: Dict[str, Any]) -> "User":
        """Deserialize from a store record."""
        return User(
            id=UUID(record["id"]),
            username=record["username"],
            email=record["email"],
            password_hash=record["password_hash"],
            session_token=record["session_token"],
            created_at=_as_utc(record["created_at"]),
            updated_at=_as_utc(record["updated_at"]),
        )

    def __eq__(self, other: object) -> bool:
        """Equality based on id (aggregate identity)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

"""SessionToken value object."""

from dataclasses import dataclass
import uuid


@dataclass(frozen=True)
class SessionToken:
    """Opaque session token.

    Minted tokens are random UUID4 strings. Presented tokens are taken
    as-is: the value is opaque to the domain and only needs to be a
    non-empty string.

    Examples:
        >>> token = SessionToken.generate()
        >>> len(str(token))
        36

        >>> SessionToken("b2a7c0de-0000-4000-8000-000000000000").value
        'b2a7c0de-0000-4000-8000-000000000000'
    """

    value: str

    def __post_init__(self) -> None:
        """Validate token value."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Session token must be a non-empty string")

    @staticmethod
    def generate() -> "SessionToken":
        """Mint a new random token."""
        return SessionToken(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        # Never print the full token in logs
        return f"SessionToken('{self.value[:8]}...')"

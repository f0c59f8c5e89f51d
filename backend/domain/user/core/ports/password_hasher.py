"""Password hasher port (interface)."""

from typing import Protocol


class IPasswordHasher(Protocol):
    """
    Salted one-way password hashing.

    Implementations must embed salt and parameters in the returned hash
    so verify needs nothing else.
    """

    def hash(self, password: str) -> str:
        """Hash a plaintext password."""
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash.

        Returns:
            False on mismatch or on an unrecognized hash, never raises
        """
        ...

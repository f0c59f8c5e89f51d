"""User entities."""

from domain.user.core.entities.user import User

__all__ = ["User"]

"""User domain events."""

from domain.user.core.events.user_registered import UserRegistered

__all__ = ["UserRegistered"]

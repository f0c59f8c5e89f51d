"""User event subscribers."""

from .session_reassigned_handler import SessionReassignedHandler
from .user_registered_handler import UserRegisteredHandler

__all__ = ["SessionReassignedHandler", "UserRegisteredHandler"]

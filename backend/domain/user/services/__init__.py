"""User domain services."""

from domain.user.services.registry import (
    USER_UNIQUE_FIELDS,
    USERS_TABLE,
    Login,
    Registration,
    UserRegistry,
)

__all__ = ["UserRegistry", "Registration", "Login", "USERS_TABLE", "USER_UNIQUE_FIELDS"]

"""User domain exceptions."""

from domain.user.core.exceptions.user_errors import (
    InvalidCredentialsError,
    MissingIdentityKeyError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "UserNotFoundError",
    "UserAlreadyExistsError",
    "InvalidCredentialsError",
    "MissingIdentityKeyError",
]

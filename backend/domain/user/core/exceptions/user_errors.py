"""User domain exceptions."""

from domain.shared.errors import ConflictError, NotFoundError, UnauthorizedError


class UserNotFoundError(NotFoundError):
    """User was not found in the store."""

    entity = "User"


class UserAlreadyExistsError(ConflictError):
    """Username or email is already registered."""

    pass


class InvalidCredentialsError(UnauthorizedError):
    """Unknown user or wrong password.

    Both cases share one message so a login attempt cannot be used to
    discover which usernames exist.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class MissingIdentityKeyError(UnauthorizedError):
    """Login attempted with neither username nor email."""

    def __init__(self) -> None:
        super().__init__("Email or username is required")

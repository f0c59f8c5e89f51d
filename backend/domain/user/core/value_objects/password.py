"""Password policy."""

from domain.shared.errors import ValidationError

MIN_PASSWORD_LENGTH = 8


def check_password_policy(password: str) -> None:
    """Reject passwords shorter than 8 characters.

    Runs server-side regardless of any client-side validation.

    Raises:
        ValidationError: On the "password" field
    """
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError.single("password", "Password must be at least 8 characters long")

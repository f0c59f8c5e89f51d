"""Username value object."""

from dataclasses import dataclass
import re

from domain.shared.errors import ValidationError

USERNAME_PATTERN = re.compile(r"^[A-Za-z-]+$")
MIN_USERNAME_LENGTH = 3


@dataclass(frozen=True)
class Username:
    """Login name, unique case-insensitively.

    Letters and dashes only, at least 3 characters. Stored lower-cased,
    which is what makes uniqueness case-insensitive.

    Examples:
        >>> Username("Mary-Jane").value
        'mary-jane'
    """

    value: str

    def __post_init__(self) -> None:
        """Validate and normalize."""
        raw = self.value.strip() if isinstance(self.value, str) else ""
        if len(raw) < MIN_USERNAME_LENGTH:
            raise ValidationError.single(
                "username", "Username must be at least 3 characters long"
            )
        if not USERNAME_PATTERN.match(raw):
            raise ValidationError.single("username", "Username must be only letters and dashes")
        object.__setattr__(self, "value", raw.lower())

    @staticmethod
    def normalize(raw: str) -> str:
        """Lookup form of a username, without validating it."""
        return raw.strip().lower()

    def __str__(self) -> str:
        return self.value

"""Email value object."""

from dataclasses import dataclass
import re

from domain.shared.errors import ValidationError

# Shape check only: one "@", no whitespace, a dot in the domain part
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Email:
    """Email address, unique, stored trimmed and lower-cased.

    Examples:
        >>> Email(" Someone@Example.com ").value
        'someone@example.com'
    """

    value: str

    def __post_init__(self) -> None:
        """Validate and normalize."""
        raw = self.value.strip() if isinstance(self.value, str) else ""
        if not EMAIL_PATTERN.match(raw):
            raise ValidationError.single("email", "Email must be a valid email address")
        object.__setattr__(self, "value", raw.lower())

    @staticmethod
    def normalize(raw: str) -> str:
        """Lookup form of an address, without validating it."""
        return raw.strip().lower()

    def __str__(self) -> str:
        return self.value

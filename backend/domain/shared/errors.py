"""Domain error taxonomy shared by every bounded context.

The transport layer maps each family to a response; the domain never
decides status codes. NotFound covers both "absent" and
"owned by another session" so callers cannot discover which ids exist.
"""

from dataclasses import dataclass
from typing import List, Optional


class DomainError(Exception):
    """Base exception for all domain errors."""

    pass


@dataclass(frozen=True)
class FieldError:
    """Single field-level validation failure."""

    field: str
    message: str


class ValidationError(DomainError):
    """Raised when a field is malformed or out of range.

    Carries one or more FieldError entries so the caller can report
    every offending field at once.

    Examples:
        >>> error = ValidationError.single("name", "Minimum 3 characters")
        >>> error.errors[0].field
        'name'
    """

    def __init__(self, errors: List[FieldError]):
        """Initialize with the list of field errors.

        Args:
            errors: Non-empty list of field errors
        """
        self.errors = list(errors)
        detail = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {detail}")

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        """Build a ValidationError for one field."""
        return cls([FieldError(field=field, message=message)])


class UnauthenticatedError(DomainError):
    """No usable session token where one is required."""

    def __init__(self, reason: str = "Session token required"):
        self.reason = reason
        super().__init__(reason)


class UnauthorizedError(DomainError):
    """Credential mismatch or missing identity key."""

    def __init__(self, reason: str = "Invalid credentials"):
        self.reason = reason
        super().__init__(reason)


class NotFoundError(DomainError):
    """Entity absent or not owned by the caller's session."""

    entity: str = "Entity"

    def __init__(self, identifier: Optional[str] = None):
        """Initialize with the identifier that was looked up.

        Args:
            identifier: Identifier used for the lookup, if any
        """
        self.identifier = identifier
        if identifier:
            super().__init__(f"{self.entity} not found: {identifier}")
        else:
            super().__init__(f"{self.entity} not found")


class ConflictError(DomainError):
    """Uniqueness violation on a write."""

    def __init__(self, field: str, value: str):
        """Initialize with the conflicting field and value.

        Args:
            field: Name of the unique field
            value: Value that already exists
        """
        self.field = field
        self.value = value
        super().__init__(f"{field} already exists: {value}")

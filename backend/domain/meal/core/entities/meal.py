"""Meal entity - a single eating occasion tagged in or out of diet."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import UUID, uuid4

from domain.shared.errors import FieldError, ValidationError

MIN_TEXT_LENGTH = 3


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC; naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_millis(value: datetime) -> datetime:
    """Truncate to whole milliseconds, the resolution of stored dates."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


@dataclass(frozen=True)
class MealFields:
    """
    Mutable fields of a meal, validated as a unit.

    Create and update both take a complete MealFields: update is a full
    replace, never a patch.

    Invariants:
    - name and description are strings of at least 3 characters
    - in_diet is a real boolean (not a truthy value)
    - date is a datetime, stored in UTC at millisecond precision

    Raises:
        ValidationError: Listing every offending field

    Examples:
        >>> fields = MealFields(
        ...     name="Breakfast",
        ...     description="Toast and fruit",
        ...     in_diet=True,
        ...     date=datetime(2024, 5, 1, 8, 0),
        ... )
        >>> fields.date.tzinfo is not None
        True
    """

    name: str
    description: str
    in_diet: bool
    date: datetime

    def __post_init__(self) -> None:
        errors: List[FieldError] = []

        if not isinstance(self.name, str) or len(self.name.strip()) < MIN_TEXT_LENGTH:
            errors.append(FieldError("name", "Minimum 3 characters for name"))

        if (
            not isinstance(self.description, str)
            or len(self.description.strip()) < MIN_TEXT_LENGTH
        ):
            errors.append(FieldError("description", "Minimum 3 characters for description"))

        if not isinstance(self.in_diet, bool):
            errors.append(FieldError("in_diet", "Must be a boolean"))

        if not isinstance(self.date, datetime):
            errors.append(FieldError("date", "Must be a datetime"))

        if errors:
            raise ValidationError(errors)

        object.__setattr__(self, "date", to_millis(as_utc(self.date)))


@dataclass
class Meal:
    """
    Meal aggregate.

    Ownership is carried only by session_token; there is no link to a
    user id. created_at never changes after creation.

    Identity: Defined by unique ID (UUID)
    """

    id: UUID
    name: str
    description: str
    in_diet: bool
    date: datetime
    session_token: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, fields: MealFields, session_token: str, now: datetime) -> "Meal":
        """
        Build a new meal owned by session_token.

        Args:
            fields: Validated meal fields
            session_token: Owning token value
            now: Creation timestamp (UTC)

        Returns:
            New Meal with a fresh id and created_at == updated_at == now
        """
        return cls(
            id=uuid4(),
            name=fields.name,
            description=fields.description,
            in_diet=fields.in_diet,
            date=fields.date,
            session_token=session_token,
            created_at=to_millis(now),
            updated_at=to_millis(now),
        )

    @property
    def fields(self) -> MealFields:
        return MealFields(
            name=self.name,
            description=self.description,
            in_diet=self.in_diet,
            date=self.date,
        )

    def with_fields(self, fields: MealFields, now: datetime) -> "Meal":
        """Return a copy with every mutable field replaced and updated_at refreshed."""
        return replace(
            self,
            name=fields.name,
            description=fields.description,
            in_diet=fields.in_diet,
            date=fields.date,
            updated_at=to_millis(now),
        )

    def to_record(self) -> Dict[str, Any]:
        """Serialize to a store record."""
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "in_diet": self.in_diet,
            "date": self.date,
            "session_token": self.session_token,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Meal":
        """Deserialize from a store record."""
        return cls(
            id=UUID(record["id"]),
            name=record["name"],
            description=record["description"],
            in_diet=bool(record["in_diet"]),
            date=as_utc(record["date"]),
            session_token=record["session_token"],
            created_at=as_utc(record["created_at"]),
            updated_at=as_utc(record["updated_at"]),
        )

"""Request and response models for the REST API.

Request models only shape the payload; field rules (lengths, username
pattern, email format) are enforced by the domain so the messages are
the same whatever the entry point. Response fields are camelCase.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationInfo, field_validator

from domain.meal.core.entities.meal import Meal, MealFields
from domain.meal.services.adherence import AdherenceSummary
from domain.user.core.entities.user import User


class MealInput(BaseModel):
    """Body of POST /meals and PUT /meals/{id}. Update is a full replace."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    in_diet: StrictBool = Field(..., alias="inDiet")
    date: datetime

    def to_fields(self) -> MealFields:
        """Domain fields.

        Raises:
            ValidationError: Name or description too short
        """
        return MealFields(
            name=self.name,
            description=self.description,
            in_diet=self.in_diet,
            date=self.date,
        )


class MealResponse(BaseModel):
    id: str
    name: str
    description: str
    inDiet: bool
    date: datetime
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_meal(cls, meal: Meal) -> "MealResponse":
        return cls(
            id=str(meal.id),
            name=meal.name,
            description=meal.description,
            inDiet=meal.in_diet,
            date=meal.date,
            createdAt=meal.created_at,
            updatedAt=meal.updated_at,
        )


class MealListResponse(BaseModel):
    total: int
    meals: List[MealResponse]


class RegisterUserInput(BaseModel):
    """Body of POST /users."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    email: str
    password: str
    confirm_password: str = Field(..., alias="confirmPassword")

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("Passwords do not match")
        return value


class LoginInput(BaseModel):
    """Body of PUT /users/login: username or email, plus password."""

    username: Optional[str] = None
    email: Optional[str] = None
    password: str


class PublicUser(BaseModel):
    id: str
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(**user.public())


class UserSummaryResponse(BaseModel):
    """GET /users: adherence of the session plus its owner, if any."""

    total: int
    totalInDiet: int
    totalOutDiet: int
    bestSequence: int
    user: Optional[PublicUser] = None

    @classmethod
    def build(cls, adherence: AdherenceSummary, user: Optional[User]) -> "UserSummaryResponse":
        return cls(
            total=adherence.total,
            totalInDiet=adherence.total_in_diet,
            totalOutDiet=adherence.total_out_diet,
            bestSequence=adherence.best_sequence,
            user=PublicUser.from_user(user) if user is not None else None,
        )


class LoginResponse(BaseModel):
    user: PublicUser
    sessionId: str


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    details: Optional[List[FieldErrorResponse]] = None

"""CQRS Commands for the meal ledger."""

from .create_meal import (
    CreateMealCommand,
    CreateMealCommandHandler,
    CreateMealResult,
)
from .update_meal import (
    UpdateMealCommand,
    UpdateMealCommandHandler,
)
from .delete_meal import (
    DeleteMealCommand,
    DeleteMealCommandHandler,
)

__all__ = [
    "CreateMealCommand",
    "CreateMealCommandHandler",
    "CreateMealResult",
    "UpdateMealCommand",
    "UpdateMealCommandHandler",
    "DeleteMealCommand",
    "DeleteMealCommandHandler",
]

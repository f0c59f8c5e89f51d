"""Domain exceptions for the Meal bounded context."""

from domain.shared.errors import NotFoundError


class MealNotFoundError(NotFoundError):
    """Raised when no meal with the id is owned by the caller's token.

    Also raised when the meal exists under another token, and when the
    id is not even a UUID: the caller must not learn which case it was.
    """

    entity = "Meal"

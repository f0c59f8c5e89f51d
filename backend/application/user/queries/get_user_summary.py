"""Get user summary query.

Adherence statistics of the session together with the public profile
of the user owning it, if any.
"""

from dataclasses import dataclass
from typing import Optional

from application.meal.queries.get_adherence_summary import (
    GetAdherenceSummaryQuery,
    GetAdherenceSummaryQueryHandler,
)
from domain.meal.services.adherence import AdherenceSummary
from domain.session.identity_manager import SessionIdentityManager
from domain.user.core.entities.user import User
from domain.user.core.exceptions.user_errors import UserNotFoundError
from domain.user.services.registry import UserRegistry


@dataclass(frozen=True)
class UserSummary:
    """
    Adherence plus owner.

    Attributes:
        adherence: Counts and best in-diet streak of the session's meals
        user: User owning the session, None for an anonymous session
    """

    adherence: AdherenceSummary
    user: Optional[User]


@dataclass(frozen=True)
class GetUserSummaryQuery:
    """Query: Summary for the session."""

    session_token: Optional[str]


class GetUserSummaryQueryHandler:
    """Handler for GetUserSummaryQuery."""

    def __init__(
        self,
        identity: SessionIdentityManager,
        adherence: GetAdherenceSummaryQueryHandler,
        registry: UserRegistry,
    ):
        self._identity = identity
        self._adherence = adherence
        self._registry = registry

    async def handle(self, query: GetUserSummaryQuery) -> UserSummary:
        """
        Execute query.

        Raises:
            UnauthenticatedError: No token, or a token that owns no meal and no user
        """
        token = await self._identity.require_token(query.session_token, must_own_records=True)

        adherence = await self._adherence.handle(
            GetAdherenceSummaryQuery(session_token=str(token))
        )

        user: Optional[User]
        try:
            user = await self._registry.find_by_session_token(token)
        except UserNotFoundError:
            user = None

        return UserSummary(adherence=adherence, user=user)

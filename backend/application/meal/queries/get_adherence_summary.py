"""Get adherence summary query.

Counts and longest in-diet streak over the session's meals, computed on
demand from the ledger's current contents.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from domain.meal.services.adherence import AdherenceSummary, summarize_adherence
from domain.meal.services.ledger import MealLedger
from domain.session.identity_manager import SessionIdentityManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetAdherenceSummaryQuery:
    """
    Query: Adherence statistics for a session.

    Attributes:
        session_token: Token carried by the request
        must_own_records: Reject tokens that own no meal and no user
    """

    session_token: Optional[str]
    must_own_records: bool = False


class GetAdherenceSummaryQueryHandler:
    """Handler for GetAdherenceSummaryQuery."""

    def __init__(self, identity: SessionIdentityManager, ledger: MealLedger):
        self._identity = identity
        self._ledger = ledger

    async def handle(self, query: GetAdherenceSummaryQuery) -> AdherenceSummary:
        """
        Execute query.

        Raises:
            UnauthenticatedError: No token, or (when asked) a token owning nothing
        """
        token = await self._identity.require_token(
            query.session_token, must_own_records=query.must_own_records
        )
        meals = await self._ledger.list(token)
        summary = summarize_adherence(meals)

        logger.debug(
            "Adherence summarized",
            extra={"total": summary.total, "best_sequence": summary.best_sequence},
        )
        return summary

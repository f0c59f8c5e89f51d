"""Session identity manager.

Issues, validates and reassigns session tokens. Owns the rule that a
token identifies exactly one owner at a time: on login every record
under the old token moves to a new one inside a single transaction.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from domain.session.ports import ITokenOwner
from domain.session.token import SessionToken
from domain.shared.errors import UnauthenticatedError
from domain.shared.ports.store import IStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reassignment:
    """Outcome of a session reassignment."""

    old_token: SessionToken
    new_token: SessionToken
    at: datetime


class SessionIdentityManager:
    """Domain service for session tokens.

    Token owners (the meal ledger, the user registry) are registered
    after construction because the registry itself depends on this
    manager to perform logins.

    Examples:
        >>> manager = SessionIdentityManager(store)
        >>> manager.register_owner(ledger)
        >>> token, is_new = manager.ensure_token(None)
        >>> is_new
        True
        >>> new_token = await manager.reassign(token)
    """

    def __init__(
        self,
        store: IStore,
        token_factory: Callable[[], SessionToken] = SessionToken.generate,
    ) -> None:
        """
        Initialize manager.

        Args:
            store: Persistent store (transactions run against it)
            token_factory: Mints new tokens (overridable in tests)
        """
        self._store = store
        self._token_factory = token_factory
        self._owners: List[ITokenOwner] = []

    def register_owner(self, owner: ITokenOwner) -> None:
        """Register a component whose records follow the token on login."""
        self._owners.append(owner)

    @property
    def owners(self) -> List[ITokenOwner]:
        return list(self._owners)

    def ensure_token(self, presented: Optional[str]) -> Tuple[SessionToken, bool]:
        """
        Return the presented token, or mint one.

        Args:
            presented: Token carried by the request, if any

        Returns:
            (token, is_new): is_new is True only when a token was minted
        """
        if presented and presented.strip():
            return SessionToken(presented), False

        token = self._token_factory()
        logger.debug("Session token minted", extra={"token": repr(token)})
        return token, True

    async def require_token(
        self,
        presented: Optional[str],
        must_own_records: bool = False,
    ) -> SessionToken:
        """
        Return the presented token or fail.

        Never mints. Presence is always required; ownership of at least
        one record is required only when the caller asks for it.

        Args:
            presented: Token carried by the request, if any
            must_own_records: Also fail when no owner holds a record

        Returns:
            The presented token

        Raises:
            UnauthenticatedError: No token, or token owns nothing
        """
        if not presented or not presented.strip():
            raise UnauthenticatedError("Session token required")

        token = SessionToken(presented)

        if must_own_records:
            for owner in self._owners:
                if await owner.owns(self._store, token):
                    return token
            raise UnauthenticatedError("Session token does not identify any records")

        return token

    async def reassign(self, old_token: SessionToken) -> SessionToken:
        """
        Mint a new token and move every record of old_token to it.

        All owners re-stamp inside one transaction. If any of them fails
        nothing moves and the old token stays valid.

        Args:
            old_token: Token being retired

        Returns:
            The new token

        Raises:
            Exception: Whatever the store raised; the transaction is
                rolled back before it propagates
        """

        async def _given(tx: IStore) -> SessionToken:
            return old_token

        reassignment = await self.reassign_current(_given)
        return reassignment.new_token

    async def reassign_current(
        self,
        resolve_old: Callable[[IStore], Awaitable[SessionToken]],
    ) -> Reassignment:
        """
        Like reassign, but read the token to retire inside the transaction.

        resolve_old receives the transaction-bound store, so a caller that
        read the token earlier re-stamps from its current value even when a
        concurrent login moved it in between.

        Args:
            resolve_old: Returns the token currently in force; may raise to
                abort the transaction

        Returns:
            The retired token, the new one and the re-stamp time
        """
        new_token = self._token_factory()
        now = datetime.now(timezone.utc)

        async def _restamp_all(tx: IStore) -> Tuple[SessionToken, Dict[str, int]]:
            old_token = await resolve_old(tx)
            moved: Dict[str, int] = {}
            for owner in self._owners:
                moved[owner.owner_name] = await owner.restamp(tx, old_token, new_token, now)
            return old_token, moved

        try:
            old_token, moved = await self._store.with_transaction(_restamp_all)
        except Exception:
            logger.error("Session reassignment rolled back", exc_info=True)
            raise

        logger.info(
            "Session reassigned",
            extra={
                "old_token": repr(old_token),
                "new_token": repr(new_token),
                "moved": moved,
            },
        )
        return Reassignment(old_token=old_token, new_token=new_token, at=now)

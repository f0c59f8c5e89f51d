"""Ports implemented by components that own session-scoped records."""

from datetime import datetime
from typing import Protocol

from domain.session.token import SessionToken
from domain.shared.ports.store import IStore


class ITokenOwner(Protocol):
    """
    A component whose records are stamped with a session token.

    The identity manager drives ownership transfer through this port, so
    it never needs to know which tables exist. Both methods receive the
    store to use, which is the transaction-bound store during a login.
    """

    owner_name: str

    async def restamp(
        self,
        store: IStore,
        old_token: SessionToken,
        new_token: SessionToken,
        at: datetime,
    ) -> int:
        """Move every record owned by old_token to new_token.

        Returns:
            Number of records moved
        """
        ...

    async def owns(self, store: IStore, token: SessionToken) -> bool:
        """Check whether any record is stamped with token."""
        ...

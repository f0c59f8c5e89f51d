"""Unit tests for SessionIdentityManager."""

from datetime import datetime
from typing import Any, List

import pytest

from domain.meal.services.ledger import MEALS_TABLE, MealLedger
from domain.session.identity_manager import SessionIdentityManager
from domain.session.token import SessionToken
from domain.shared.errors import UnauthenticatedError
from domain.shared.ports.store import IStore
from infrastructure.persistence.in_memory.store import InMemoryStore


class ExplodingOwner:
    """Token owner whose re-stamp always fails."""

    owner_name = "exploding"

    async def restamp(
        self, store: IStore, old_token: SessionToken, new_token: SessionToken, at: datetime
    ) -> int:
        raise RuntimeError("disk full")

    async def owns(self, store: IStore, token: SessionToken) -> bool:
        return False


class TestSessionToken:
    def test_generate_is_uuid_string(self) -> None:
        token = SessionToken.generate()
        assert len(str(token)) == 36

    def test_generate_is_random(self) -> None:
        assert SessionToken.generate() != SessionToken.generate()

    def test_repr_hides_token(self) -> None:
        token = SessionToken("12345678-abcd-4000-8000-000000000000")
        assert "abcd" not in repr(token)

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            SessionToken("")


class TestEnsureToken:
    def test_presented_token_returned_unchanged(self, identity: SessionIdentityManager) -> None:
        token, is_new = identity.ensure_token("existing-token")

        assert str(token) == "existing-token"
        assert is_new is False

    @pytest.mark.parametrize("presented", [None, "", "   "])
    def test_missing_token_minted(
        self, identity: SessionIdentityManager, presented: Any
    ) -> None:
        token, is_new = identity.ensure_token(presented)

        assert is_new is True
        assert len(str(token)) == 36

    def test_token_factory_is_used(self, store: InMemoryStore) -> None:
        manager = SessionIdentityManager(store, token_factory=lambda: SessionToken("fixed"))
        token, _ = manager.ensure_token(None)
        assert str(token) == "fixed"


class TestRequireToken:
    @pytest.mark.asyncio
    async def test_missing_token_fails(self, identity: SessionIdentityManager) -> None:
        with pytest.raises(UnauthenticatedError):
            await identity.require_token(None)

    @pytest.mark.asyncio
    async def test_presence_is_enough_by_default(self, identity: SessionIdentityManager) -> None:
        token = await identity.require_token("never-seen")
        assert str(token) == "never-seen"

    @pytest.mark.asyncio
    async def test_must_own_records_rejects_empty_session(
        self, identity: SessionIdentityManager, ledger: MealLedger
    ) -> None:
        with pytest.raises(UnauthenticatedError):
            await identity.require_token("never-seen", must_own_records=True)

    @pytest.mark.asyncio
    async def test_must_own_records_accepts_owner(
        self, identity: SessionIdentityManager, ledger: MealLedger, make_fields: Any
    ) -> None:
        await ledger.create(SessionToken("has-meals"), make_fields())

        token = await identity.require_token("has-meals", must_own_records=True)

        assert str(token) == "has-meals"


class TestReassign:
    @pytest.mark.asyncio
    async def test_moves_records_to_new_token(
        self, identity: SessionIdentityManager, ledger: MealLedger, make_fields: Any
    ) -> None:
        old = SessionToken("old-token")
        await ledger.create(old, make_fields())
        await ledger.create(old, make_fields())

        new = await identity.reassign(old)

        assert new != old
        assert await ledger.list(old) == []
        assert len(await ledger.list(new)) == 2

    @pytest.mark.asyncio
    async def test_failure_moves_nothing(
        self, identity: SessionIdentityManager, ledger: MealLedger, make_fields: Any
    ) -> None:
        old = SessionToken("old-token")
        await ledger.create(old, make_fields())
        identity.register_owner(ExplodingOwner())

        with pytest.raises(RuntimeError, match="disk full"):
            await identity.reassign(old)

        # Ledger re-stamped first, then rolled back
        assert len(await ledger.list(old)) == 1

    @pytest.mark.asyncio
    async def test_owners_run_in_registration_order(self, store: InMemoryStore) -> None:
        calls: List[str] = []

        class Recorder:
            def __init__(self, name: str) -> None:
                self.owner_name = name

            async def restamp(self, tx: IStore, old: SessionToken, new: SessionToken, at: datetime) -> int:
                calls.append(self.owner_name)
                return 0

            async def owns(self, tx: IStore, token: SessionToken) -> bool:
                return False

        manager = SessionIdentityManager(store)
        manager.register_owner(Recorder("meals"))
        manager.register_owner(Recorder("users"))

        await manager.reassign(SessionToken("old"))

        assert calls == ["meals", "users"]
        assert [o.owner_name for o in manager.owners] == ["meals", "users"]

    @pytest.mark.asyncio
    async def test_reassign_current_resolves_token_inside_transaction(
        self, identity: SessionIdentityManager, ledger: MealLedger, make_fields: Any
    ) -> None:
        await ledger.create(SessionToken("current-token"), make_fields())

        async def resolve(tx: IStore) -> SessionToken:
            rows = await tx.select_where(MEALS_TABLE, {})
            return SessionToken(rows[0]["session_token"])

        reassignment = await identity.reassign_current(resolve)

        assert reassignment.old_token == SessionToken("current-token")
        assert len(await ledger.list(reassignment.new_token)) == 1
        assert await ledger.list(SessionToken("current-token")) == []

    @pytest.mark.asyncio
    async def test_reassign_current_aborts_when_resolve_fails(
        self, identity: SessionIdentityManager, ledger: MealLedger, make_fields: Any
    ) -> None:
        await ledger.create(SessionToken("current-token"), make_fields())

        async def resolve(tx: IStore) -> SessionToken:
            raise LookupError("row vanished")

        with pytest.raises(LookupError):
            await identity.reassign_current(resolve)

        assert len(await ledger.list(SessionToken("current-token"))) == 1

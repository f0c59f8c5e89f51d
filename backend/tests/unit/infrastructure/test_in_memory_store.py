"""Unit tests for InMemoryStore.

Tests focus on:
- Insertion order and criteria matching
- Copy isolation (callers cannot mutate stored records)
- Unique constraints on insert and update
- Transaction commit and rollback
"""

import asyncio
from typing import List

import pytest

from domain.shared.ports.store import DuplicateRecordError, IStore
from infrastructure.persistence.in_memory.store import InMemoryStore


@pytest.fixture
def users_store() -> InMemoryStore:
    return InMemoryStore(unique_fields={"users": ("username", "email")})


class TestSelect:
    @pytest.mark.asyncio
    async def test_insertion_order(self, users_store: InMemoryStore) -> None:
        for i in range(5):
            await users_store.insert("meals", {"id": str(i), "session_token": "t"})

        rows = await users_store.select_where("meals", {"session_token": "t"})

        assert [r["id"] for r in rows] == ["0", "1", "2", "3", "4"]

    @pytest.mark.asyncio
    async def test_all_criteria_must_match(self, users_store: InMemoryStore) -> None:
        await users_store.insert("meals", {"id": "1", "session_token": "a"})
        await users_store.insert("meals", {"id": "2", "session_token": "b"})

        assert await users_store.select_where("meals", {"id": "1", "session_token": "b"}) == []
        assert len(await users_store.select_where("meals", {"id": "1", "session_token": "a"})) == 1

    @pytest.mark.asyncio
    async def test_unknown_table_is_empty(self, users_store: InMemoryStore) -> None:
        assert await users_store.select_where("nothing", {}) == []
        assert await users_store.select_one_where("nothing", {}) is None

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, users_store: InMemoryStore) -> None:
        record = {"id": "1", "tags": ["a"]}
        await users_store.insert("meals", record)
        record["tags"].append("mutated-after-insert")

        row = await users_store.select_one_where("meals", {"id": "1"})
        assert row is not None
        row["tags"].append("mutated-after-select")

        assert (await users_store.select_one_where("meals", {"id": "1"})) == {"id": "1", "tags": ["a"]}


class TestWrite:
    @pytest.mark.asyncio
    async def test_update_counts_matches(self, users_store: InMemoryStore) -> None:
        await users_store.insert("meals", {"id": "1", "session_token": "a", "name": "x"})
        await users_store.insert("meals", {"id": "2", "session_token": "a", "name": "y"})

        affected = await users_store.update_where("meals", {"session_token": "a"}, {"session_token": "b"})

        assert affected == 2
        assert await users_store.select_where("meals", {"session_token": "a"}) == []

    @pytest.mark.asyncio
    async def test_update_no_match(self, users_store: InMemoryStore) -> None:
        assert await users_store.update_where("meals", {"id": "missing"}, {"name": "z"}) == 0

    @pytest.mark.asyncio
    async def test_delete_counts(self, users_store: InMemoryStore) -> None:
        await users_store.insert("meals", {"id": "1"})

        assert await users_store.delete_where("meals", {"id": "1"}) == 1
        assert await users_store.delete_where("meals", {"id": "1"}) == 0
        assert users_store.count("meals") == 0


class TestUniqueFields:
    @pytest.mark.asyncio
    async def test_duplicate_insert_rejected(self, users_store: InMemoryStore) -> None:
        await users_store.insert("users", {"id": "1", "username": "tiago", "email": "a@b.c"})

        with pytest.raises(DuplicateRecordError) as exc_info:
            await users_store.insert("users", {"id": "2", "username": "tiago", "email": "x@y.z"})

        assert exc_info.value.field == "username"
        assert users_store.count("users") == 1

    @pytest.mark.asyncio
    async def test_update_into_duplicate_rejected(self, users_store: InMemoryStore) -> None:
        await users_store.insert("users", {"id": "1", "username": "one", "email": "1@b.c"})
        await users_store.insert("users", {"id": "2", "username": "two", "email": "2@b.c"})

        with pytest.raises(DuplicateRecordError):
            await users_store.update_where("users", {"id": "2"}, {"email": "1@b.c"})

    @pytest.mark.asyncio
    async def test_rewriting_own_value_allowed(self, users_store: InMemoryStore) -> None:
        await users_store.insert("users", {"id": "1", "username": "one", "email": "1@b.c"})

        assert await users_store.update_where("users", {"id": "1"}, {"username": "one"}) == 1

    @pytest.mark.asyncio
    async def test_other_tables_unconstrained(self, users_store: InMemoryStore) -> None:
        await users_store.insert("meals", {"id": "1", "username": "same"})
        await users_store.insert("meals", {"id": "2", "username": "same"})
        assert users_store.count("meals") == 2


class TestTransaction:
    @pytest.mark.asyncio
    async def test_commit(self, users_store: InMemoryStore) -> None:
        await users_store.insert("meals", {"id": "1", "session_token": "old"})

        async def move(tx: IStore) -> int:
            return await tx.update_where("meals", {"session_token": "old"}, {"session_token": "new"})

        assert await users_store.with_transaction(move) == 1
        assert len(await users_store.select_where("meals", {"session_token": "new"})) == 1

    @pytest.mark.asyncio
    async def test_rollback_restores_every_table(self, users_store: InMemoryStore) -> None:
        await users_store.insert("meals", {"id": "1", "session_token": "old"})
        await users_store.insert("users", {"id": "u", "username": "u", "session_token": "old"})

        async def half_move(tx: IStore) -> None:
            await tx.update_where("meals", {"session_token": "old"}, {"session_token": "new"})
            await tx.delete_where("users", {"id": "u"})
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await users_store.with_transaction(half_move)

        assert len(await users_store.select_where("meals", {"session_token": "old"})) == 1
        assert users_store.count("users") == 1

    @pytest.mark.asyncio
    async def test_nested_transaction_joins(self, users_store: InMemoryStore) -> None:
        async def inner(tx: IStore) -> str:
            return await tx.insert("meals", {"id": "nested"})

        async def outer(tx: IStore) -> str:
            return await tx.with_transaction(inner)

        assert await users_store.with_transaction(outer) == "nested"

    @pytest.mark.asyncio
    async def test_other_writers_wait_for_transaction(self, users_store: InMemoryStore) -> None:
        order: List[str] = []
        entered = asyncio.Event()

        async def slow(tx: IStore) -> None:
            entered.set()
            await asyncio.sleep(0.01)
            order.append("transaction")

        async def writer() -> None:
            await entered.wait()
            await users_store.insert("meals", {"id": "w"})
            order.append("writer")

        await asyncio.gather(users_store.with_transaction(slow), writer())

        assert order == ["transaction", "writer"]

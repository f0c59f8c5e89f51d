"""Shared test fixtures.

Every test gets its own InMemoryStore and container; nothing is shared
between tests.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, List

import pytest
from passlib.context import CryptContext

from domain.meal.core.entities.meal import MealFields
from domain.meal.services.ledger import MealLedger
from domain.session.identity_manager import SessionIdentityManager
from domain.shared.events import DomainEvent
from domain.user.services.registry import UserRegistry
from infrastructure.container import Container, build_container
from infrastructure.events.in_memory_bus import InMemoryEventBus
from infrastructure.persistence.factory import DEFAULT_UNIQUE_FIELDS
from infrastructure.persistence.in_memory.store import InMemoryStore
from infrastructure.security.password_hasher import PasslibPasswordHasher

MealFieldsFactory = Callable[..., MealFields]


@pytest.fixture(autouse=True)
def _in_memory_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's .env from pointing tests at a real database."""
    monkeypatch.setenv("STORE_BACKEND", "inmemory")
    monkeypatch.delenv("SESSION_COOKIE_NAME", raising=False)
    monkeypatch.delenv("SESSION_COOKIE_MAX_AGE", raising=False)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore(unique_fields=DEFAULT_UNIQUE_FIELDS)


@pytest.fixture
def hasher() -> PasslibPasswordHasher:
    """Real pbkdf2_sha256 with few rounds, to keep the suite fast."""
    context = CryptContext(schemes=["pbkdf2_sha256"], pbkdf2_sha256__default_rounds=1000)
    return PasslibPasswordHasher(context)


@pytest.fixture
def identity(store: InMemoryStore) -> SessionIdentityManager:
    return SessionIdentityManager(store)


@pytest.fixture
def ledger(store: InMemoryStore, identity: SessionIdentityManager) -> MealLedger:
    ledger = MealLedger(store)
    identity.register_owner(ledger)
    return ledger


@pytest.fixture
def registry(
    store: InMemoryStore,
    identity: SessionIdentityManager,
    ledger: MealLedger,
    hasher: PasslibPasswordHasher,
) -> UserRegistry:
    registry = UserRegistry(store, identity, hasher)
    identity.register_owner(registry)
    return registry


class RecordingEventBus(InMemoryEventBus):
    """Event bus that also keeps every published event."""

    def __init__(self) -> None:
        super().__init__()
        self.published: List[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.published.append(event)
        await super().publish(event)

    def of_type(self, event_type: type) -> List[Any]:
        return [e for e in self.published if isinstance(e, event_type)]


@pytest.fixture
def event_bus() -> RecordingEventBus:
    return RecordingEventBus()


@pytest.fixture
def container(
    store: InMemoryStore,
    event_bus: RecordingEventBus,
    hasher: PasslibPasswordHasher,
) -> Container:
    return build_container(store, event_bus=event_bus, hasher=hasher)


@pytest.fixture
def make_fields() -> MealFieldsFactory:
    """Build valid MealFields, overriding any field by keyword."""

    def _make(**overrides: Any) -> MealFields:
        values: dict[str, Any] = {
            "name": "Breakfast",
            "description": "Toast and fruit",
            "in_diet": True,
            "date": datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return MealFields(**values)

    return _make

"""Dependency container.

Builds the whole object graph around one explicitly passed store. There
is no module-level instance: app.py creates a Container per application
and tests create one per test.
"""

from dataclasses import dataclass
from typing import Optional

from application.meal.commands import (
    CreateMealCommandHandler,
    DeleteMealCommandHandler,
    UpdateMealCommandHandler,
)
from application.meal.event_handlers import MealEventLogger
from application.meal.queries import (
    GetAdherenceSummaryQueryHandler,
    GetMealQueryHandler,
    ListMealsQueryHandler,
)
from application.user.commands import (
    DeleteUserCommandHandler,
    LoginUserCommandHandler,
    RegisterUserCommandHandler,
)
from application.user.handlers import SessionReassignedHandler, UserRegisteredHandler
from application.user.queries import GetUserSummaryQueryHandler
from domain.meal.core.events import MealCreated, MealDeleted, MealUpdated
from domain.meal.services.ledger import MealLedger
from domain.session.events import SessionReassigned
from domain.session.identity_manager import SessionIdentityManager
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.store import IStore
from domain.user.core.events import UserRegistered
from domain.user.core.ports.password_hasher import IPasswordHasher
from domain.user.services.registry import UserRegistry
from infrastructure.events.in_memory_bus import InMemoryEventBus
from infrastructure.persistence.factory import create_store
from infrastructure.security.password_hasher import PasslibPasswordHasher


@dataclass
class Container:
    """Services and handlers sharing one store and one event bus."""

    store: IStore
    event_bus: IEventBus
    identity: SessionIdentityManager
    ledger: MealLedger
    registry: UserRegistry

    create_meal: CreateMealCommandHandler
    update_meal: UpdateMealCommandHandler
    delete_meal: DeleteMealCommandHandler
    get_meal: GetMealQueryHandler
    list_meals: ListMealsQueryHandler
    get_adherence_summary: GetAdherenceSummaryQueryHandler

    register_user: RegisterUserCommandHandler
    login_user: LoginUserCommandHandler
    delete_user: DeleteUserCommandHandler
    get_user_summary: GetUserSummaryQueryHandler


def build_container(
    store: IStore,
    event_bus: Optional[IEventBus] = None,
    hasher: Optional[IPasswordHasher] = None,
) -> Container:
    """
    Wire services and handlers around store.

    The identity manager is built first; the ledger and the registry are
    then registered as its token owners, so a login re-stamps meals and
    the user row in the same transaction.

    Args:
        store: Persistent store, owned by the caller
        event_bus: Defaults to a fresh InMemoryEventBus with logging subscribers
        hasher: Defaults to PasslibPasswordHasher
    """
    if event_bus is None:
        event_bus = InMemoryEventBus()
        subscribe_logging_handlers(event_bus)

    identity = SessionIdentityManager(store)
    ledger = MealLedger(store)
    registry = UserRegistry(store, identity, hasher or PasslibPasswordHasher())
    identity.register_owner(ledger)
    identity.register_owner(registry)

    get_adherence_summary = GetAdherenceSummaryQueryHandler(identity, ledger)

    return Container(
        store=store,
        event_bus=event_bus,
        identity=identity,
        ledger=ledger,
        registry=registry,
        create_meal=CreateMealCommandHandler(identity, ledger, event_bus),
        update_meal=UpdateMealCommandHandler(identity, ledger, event_bus),
        delete_meal=DeleteMealCommandHandler(identity, ledger, event_bus),
        get_meal=GetMealQueryHandler(identity, ledger),
        list_meals=ListMealsQueryHandler(identity, ledger),
        get_adherence_summary=get_adherence_summary,
        register_user=RegisterUserCommandHandler(registry, event_bus),
        login_user=LoginUserCommandHandler(registry, event_bus),
        delete_user=DeleteUserCommandHandler(registry),
        get_user_summary=GetUserSummaryQueryHandler(identity, get_adherence_summary, registry),
    )


def create_container() -> Container:
    """Container around a store selected from the environment."""
    return build_container(create_store())


def subscribe_logging_handlers(event_bus: IEventBus) -> None:
    meal_logger = MealEventLogger()
    event_bus.subscribe(MealCreated, meal_logger.on_created)
    event_bus.subscribe(MealUpdated, meal_logger.on_updated)
    event_bus.subscribe(MealDeleted, meal_logger.on_deleted)
    event_bus.subscribe(UserRegistered, UserRegisteredHandler().handle)
    event_bus.subscribe(SessionReassigned, SessionReassignedHandler().handle)

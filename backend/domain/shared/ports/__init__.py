"""Shared ports (interfaces) for the domain layer."""

from domain.shared.ports.event_bus import EventHandler, IEventBus
from domain.shared.ports.store import (
    Criteria,
    DuplicateRecordError,
    IStore,
    Record,
    UniqueFields,
)

__all__ = [
    "IStore",
    "Record",
    "Criteria",
    "UniqueFields",
    "DuplicateRecordError",
    "IEventBus",
    "EventHandler",
]

"""In-memory event bus implementation.

Handlers are awaited in subscription order. A handler subscribed to a
base event class also receives every subclass event, so subscribing to
DomainEvent observes everything.
"""

from collections import defaultdict
import logging
from typing import DefaultDict, List, Type

from domain.shared.events import DomainEvent
from domain.shared.ports.event_bus import EventHandler, TEvent

logger = logging.getLogger(__name__)


class InMemoryEventBus:
    """
    In-memory implementation of IEventBus port.

    Error handling: a failing handler is logged with its traceback and
    the remaining handlers still run. publish never raises because of a
    subscriber.

    Example:
        >>> bus = InMemoryEventBus()
        >>>
        >>> async def audit(event: MealCreated) -> None:
        ...     print(f"Meal created: {event.meal_id}")
        >>>
        >>> bus.subscribe(MealCreated, audit)
        >>> await bus.publish(MealCreated.create(...))
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: Type[TEvent], handler: EventHandler[TEvent]) -> None:
        """
        Subscribe a handler to an event type and its subclasses.

        The same handler subscribed twice is called twice.
        """
        self._handlers[event_type].append(handler)

        logger.debug(
            "Handler subscribed",
            extra={"event_type": event_type.__name__, "handler": _name(handler)},
        )

    async def publish(self, event: DomainEvent) -> None:
        """Deliver event to every handler subscribed to its type or a base type."""
        handlers = self._handlers_for(type(event))
        event_name = type(event).__name__

        if not handlers:
            logger.debug("No handlers for event", extra={"event_type": event_name})
            return

        logger.debug(
            "Publishing event",
            extra={
                "event_type": event_name,
                "event_id": str(event.event_id),
                "handler_count": len(handlers),
            },
        )

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    extra={
                        "event_type": event_name,
                        "event_id": str(event.event_id),
                        "handler": _name(handler),
                        "error": str(e),
                    },
                    exc_info=True,
                )

    def unsubscribe(self, event_type: Type[TEvent], handler: EventHandler[TEvent]) -> bool:
        """
        Remove the first subscription of handler to event_type.

        Returns:
            True if it was subscribed
        """
        handlers = self._handlers.get(event_type)
        if not handlers or handler not in handlers:
            return False

        handlers.remove(handler)
        return True

    def clear(self) -> None:
        """Remove all subscriptions."""
        self._handlers.clear()

    def get_handler_count(self, event_type: Type[DomainEvent]) -> int:
        """Number of handlers an event of event_type would reach."""
        return len(self._handlers_for(event_type))

    def _handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        # Most specific type first, then its bases
        handlers: List[EventHandler] = []
        for klass in event_type.__mro__:
            handlers.extend(self._handlers.get(klass, ()))
        return handlers


def _name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", repr(handler))

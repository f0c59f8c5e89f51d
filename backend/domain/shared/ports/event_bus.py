"""Event bus port (interface).

Handlers subscribe per event type and are awaited in subscription order.
"""

from typing import Awaitable, Callable, Protocol, Type, TypeVar

from domain.shared.events import DomainEvent

TEvent = TypeVar("TEvent", bound=DomainEvent)

EventHandler = Callable[[TEvent], Awaitable[None]]


class IEventBus(Protocol):
    """
    Interface for event publishing and subscription.

    Example usage (application layer):
        >>> async def on_reassigned(event: SessionReassigned) -> None:
        ...     logger.info("session moved", extra={"moved": event.meals_moved})
        ...
        >>> event_bus.subscribe(SessionReassigned, on_reassigned)
        >>> await event_bus.publish(SessionReassigned.create(...))
    """

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: Type of event to listen for (e.g., MealCreated)
            handler: Async function to call when event is published
        """
        ...

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish an event to all subscribed handlers.

        Note:
            - Handlers are called in subscription order
            - A failing handler must not prevent the others from running
        """
        ...

    def unsubscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> bool:
        """
        Unsubscribe a handler from an event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        ...

    def clear(self) -> None:
        """Clear all event subscriptions."""
        ...

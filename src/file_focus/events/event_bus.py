"""
Event Bus - Event-driven communication system.

This module provides a lightweight event bus used for tree change
notifications, decoupling the tree projector from whatever host renders it.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Type, TypeVar
from uuid import uuid4

logger = logging.getLogger(__name__)


T = TypeVar('T', bound='DomainEvent')


@dataclass
class DomainEvent:
    """Base class for all domain events."""
    event_id: str = field(default_factory=lambda: f"evt_{uuid4().hex}")


class EventBus:
    """
    Event bus for publishing and subscribing to domain events.

    Handlers may be plain callables or coroutine functions. They run in
    subscription order; a failing handler is logged and does not stop the
    others.
    """

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[Callable[[Any], Any]]] = {}

    def subscribe(
        self,
        event_type: Type[T],
        handler: Callable[[T], Any]
    ) -> Callable[[], None]:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: The event class to subscribe to
            handler: The handler function/method

        Returns:
            A callable that removes the subscription
        """
        self._handlers.setdefault(event_type, []).append(handler)

        def _unsubscribe() -> None:
            self.unsubscribe(event_type, handler)

        return _unsubscribe

    def unsubscribe(
        self,
        event_type: Type[DomainEvent],
        handler: Callable
    ) -> None:
        """Unsubscribe a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def subscriber_count(self, event_type: Type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish an event to all subscribers.

        Handlers registered for a parent event class receive subclasses too.
        """
        handlers: List[Callable] = []
        for event_type in type(event).__mro__:
            if event_type in self._handlers:
                handlers.extend(self._handlers[event_type])

        for handler in handlers:
            await self._safe_handle(handler, event)

    async def _safe_handle(self, handler: Callable, event: DomainEvent) -> None:
        """Safely handle an event, catching exceptions."""
        try:
            result = handler(event)
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.error(f"Error in event handler {handler} for {event.event_id}: {e}")

    def clear(self) -> None:
        """Remove every subscription."""
        self._handlers.clear()

"""
Event Bus Infrastructure

Architectural Intent:
- In-memory event bus carrying the outcome of one deployment check
- Dispatch follows the event's class hierarchy: a handler subscribed to
  DomainEvent sees every event, one subscribed to
  SubscriptionFilterDeletedEvent only sees deletions
- Every published event is logged with its fields as structured extras, so
  --json-logs output carries the check outcome
"""

import logging
from typing import Awaitable, Callable

from stackgate.domain.events.event_base import DomainEvent

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], Awaitable[None]]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[type, list[Handler]] = {}
        self._published: list[DomainEvent] = []

    @property
    def published(self) -> tuple[DomainEvent, ...]:
        return tuple(self._published)

    def handlers_for(self, event: DomainEvent) -> list[Handler]:
        """Handlers of the event's own type first, then of its base classes."""
        return [
            handler
            for event_type in type(event).__mro__
            for handler in self._handlers.get(event_type, [])
        ]

    async def publish(self, events: list[DomainEvent]) -> None:
        for event in events:
            self._published.append(event)
            logger.info("%s for %s", event.event_type, event.aggregate_id,
                        extra={"event": event.to_dict()})
            for handler in self.handlers_for(event):
                await handler(event)

    def subscribe(self, event_type: type, handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

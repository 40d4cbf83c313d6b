"""Base classes for domain events in CQRS pattern."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event class."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    aggregate_id: str = ""
    aggregate_type: str = ""
    event_type: str = ""
    occurred_on: datetime = field(default_factory=datetime.now)
    version: int = 1
    event_data: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Set event_type based on class name if not provided
        if not self.event_type:
            object.__setattr__(self, 'event_type', self.__class__.__name__)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": self.event_id,
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "event_type": self.event_type,
            "occurred_on": self.occurred_on.isoformat(),
            "version": self.version,
            "event_data": self.event_data,
            "metadata": self.metadata
        }


class EventHandler(ABC):
    """Abstract base class for event handlers."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """Handle the domain event."""
        pass

    @abstractmethod
    def can_handle(self, event_type: str) -> bool:
        """Check if this handler can handle the given event type."""
        pass


class EventBus:
    """Mediates domain events to registered handlers."""

    def __init__(self):
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._middleware: List[Callable] = []

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def register_middleware(self, middleware: Callable) -> None:
        """Register middleware for event processing pipeline."""
        self._middleware.append(middleware)

    async def publish(self, event: DomainEvent) -> None:
        """Publish an event to all registered handlers."""
        event_type = event.event_type
        handlers = self._handlers.get(event_type, [])
        logger.debug("Publishing %s to %d handler(s)", event_type, len(handlers))

        for handler in handlers:
            try:
                current_handler = handler.handle
                for middleware in reversed(self._middleware):
                    current_handler = middleware(current_handler)

                await current_handler(event)
            except Exception:
                # remaining handlers still run
                logger.exception("Error handling event %s", event_type)

    async def publish_batch(self, events: List[DomainEvent]) -> None:
        """Publish multiple events in sequence."""
        for event in events:
            await self.publish(event)

    def get_subscribed_events(self) -> Dict[str, int]:
        """Get count of handlers for each event type."""
        return {event_type: len(handlers) for event_type, handlers in self._handlers.items()}


class EventStore:
    """Simple in-memory event store for domain events."""

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._events_by_aggregate: Dict[str, List[DomainEvent]] = {}

    async def save_event(self, event: DomainEvent) -> None:
        """Save a domain event."""
        self._events.append(event)
        if event.aggregate_id:
            self._events_by_aggregate.setdefault(event.aggregate_id, []).append(event)

    async def get_events_for_aggregate(self, aggregate_id: str) -> List[DomainEvent]:
        """Get the history of one entry."""
        return list(self._events_by_aggregate.get(aggregate_id, []))

    async def get_all_events(self, limit: Optional[int] = None) -> List[DomainEvent]:
        """Get all events, optionally limited to the most recent."""
        if limit:
            return self._events[-limit:]
        return self._events.copy()


class EventRecorder(EventHandler):
    """Subscriber that appends every event it receives to an EventStore."""

    def __init__(self, store: EventStore):
        self.store = store

    async def handle(self, event: DomainEvent) -> None:
        await self.store.save_event(event)

    def can_handle(self, event_type: str) -> bool:
        return True

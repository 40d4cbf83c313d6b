"""Domain events for CQRS."""

from .base import DomainEvent, EventHandler, EventBus, EventStore, EventRecorder

__all__ = ["DomainEvent", "EventHandler", "EventBus", "EventStore", "EventRecorder"]

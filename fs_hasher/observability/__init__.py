"""Observability module: hashing events."""

from fs_hasher.observability.event_bus import Event, EventBus, InMemoryEventBus

__all__ = ["Event", "EventBus", "InMemoryEventBus"]

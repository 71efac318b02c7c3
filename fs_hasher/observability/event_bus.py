"""Event bus for hashing observability."""

from __future__ import annotations

import inspect
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

HASH_DEQUEUED = "hash_dequeued"
HASH_PENDING = "hash_pending"
HASH_COMPLETE = "hash_complete"
HASH_ERROR = "hash_error"
SERIALIZER_IDLE = "serializer_idle"


@dataclass
class Event:
    event_type: str
    source: str | None = None
    algorithm: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)


EventHandler = Callable[[Event], Any]


class EventBus(Protocol):
    async def emit(self, event: Event) -> None: ...
    def on(self, event_type: str, handler: EventHandler) -> None: ...
    def off(self, event_type: str, handler: EventHandler) -> None: ...
    def on_all(self, handler: EventHandler) -> None: ...


class InMemoryEventBus:
    """In-memory event bus with sync and async handler support.

    History keeps the most recent ``history_limit`` events; ``None`` keeps
    everything.
    """

    def __init__(self, history_limit: int | None = 1000) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._global_handlers: list[EventHandler] = []
        self._history: deque[Event] = deque(maxlen=history_limit)

    async def emit(self, event: Event) -> None:
        self._history.append(event)

        handlers = list(self._global_handlers)
        if event.event_type in self._handlers:
            handlers.extend(self._handlers[event.event_type])

        for handler in handlers:
            result = handler(event)
            if inspect.isawaitable(result):
                await result

    def on(self, event_type: str, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def off(self, event_type: str, handler: EventHandler) -> None:
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
            except ValueError:
                pass

    def on_all(self, handler: EventHandler) -> None:
        self._global_handlers.append(handler)

    @property
    def history(self) -> list[Event]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()

"""Progress events published by an evolution run."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of evolution events."""

    RUN_STARTED = auto()
    GENERATION_STARTED = auto()
    GENERATION_EVALUATED = auto()
    NEW_BEST = auto()
    RUN_COMPLETED = auto()


@dataclass(frozen=True)
class EvolutionEvent:
    """Immutable evolution event."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[EvolutionEvent], None]


class EventEmitter:
    """
    Simple event emitter.

    Allows subscribing to specific event types or all events.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: list[EvolutionEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def emit(self, event: EvolutionEvent) -> None:
        """Record an event and pass it to its subscribers."""
        self._event_history.append(event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)
        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> EvolutionEvent:
        """Create and emit a new event."""
        event = EvolutionEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[EvolutionEvent]:
        """Return the event history."""
        return self._event_history.copy()

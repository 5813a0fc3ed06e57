"""Game events published by the engine."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

# Events kept per game; older ones are dropped first
HISTORY_LIMIT = 200


class EventType(Enum):
    """Types of game events."""

    # Deck
    DECK_CREATED = auto()
    DECK_SHUFFLED = auto()
    CARD_DEALT = auto()
    DRAW_FAILED = auto()

    # Round
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Player
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_BUSTS = auto()

    # Dealer
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    INVALID_ACTION = auto()


@dataclass(frozen=True)
class GameEvent:
    """Something that happened in a game, with its details in ``data``."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Dispatches game events to subscribers.

    Handlers subscribe to one event type, or to every event with
    ``event_type=None``. The most recent ``history_limit`` events are kept
    for inspection.
    """

    def __init__(self, history_limit: int = HISTORY_LIMIT) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._history: deque[GameEvent] = deque(maxlen=history_limit)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Call ``handler`` for events of ``event_type`` (all events if None)."""
        self._handlers.setdefault(event_type, []).append(handler)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Build an event from keyword data, record it and notify handlers."""
        event = GameEvent(event_type=event_type, data=data)
        self._history.append(event)

        for handler in self._handlers.get(event_type, []):
            handler(event)
        for handler in self._handlers.get(None, []):
            handler(event)

        return event

    @property
    def history(self) -> list[GameEvent]:
        """Recorded events, oldest first."""
        return list(self._history)

"""Session events and the bus that carries them.

The engine publishes; the shell (scoreboard, message popups, sound) and the
attempt log subscribe. Events are delivered synchronously, inside the
``advance`` call that produced them.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List


class EventType(str, Enum):
    """Everything the engine announces."""

    # Attempt lifecycle
    SCENARIO_READY = "scenario_ready"  # Spot, wall, keeper and wind generated
    KICK = "kick"                      # Kick accepted, run-up begins
    STRIKE = "strike"                  # Run-up complete, ball is live
    OUTCOME = "outcome"                # Attempt decided (once per attempt)

    # Ball and keeper
    BALL_BOUNCE = "ball_bounce"
    KEEPER_JUMP = "keeper_jump"

    # Scoreboard
    SCORE_CHANGED = "score_changed"
    LIVES_CHANGED = "lives_changed"
    GAME_OVER = "game_over"
    SESSION_RESET = "session_reset"

    PHASE_CHANGE = "phase_change"


@dataclass(frozen=True)
class Event:
    """One published event.

    Attributes:
        type: What happened
        tick: Frame it happened on
        time: Session time in seconds
        attempt: Attempt number it belongs to (1-based)
        data: Payload, keyed by field name
        description: Short human-readable text
    """
    type: EventType
    tick: int
    time: float
    attempt: int = 0
    data: Dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def __str__(self) -> str:
        text = f"#{self.attempt} t={self.time:.2f}s {self.type.value}"
        return f"{text}: {self.description}" if self.description else text


EventHandler = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe with an optional event history.

    Handlers registered for a type run first, in registration order, then
    the catch-all handlers.

    Usage:
        bus = EventBus()
        bus.subscribe(EventType.OUTCOME, show_message)
        bus.subscribe_all(attempt_log.on_event)
        bus.publish(EventType.SCORE_CHANGED, tick=12, time=0.2, score=1)
    """

    def __init__(self, record: bool = True) -> None:
        self._by_type: Dict[EventType, List[EventHandler]] = defaultdict(list)
        self._catch_all: List[EventHandler] = []
        self._history: List[Event] = []
        self.record = record

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        self._by_type[event_type].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        self._catch_all.append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        handlers = self._by_type.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: Event) -> None:
        """Deliver an already-built event."""
        if self.record:
            self._history.append(event)
        for handler in list(self._by_type.get(event.type, [])):
            handler(event)
        for handler in list(self._catch_all):
            handler(event)

    def publish(
        self,
        event_type: EventType,
        tick: int,
        time: float,
        description: str = "",
        attempt: int = 0,
        **data: Any,
    ) -> Event:
        """Build, deliver and return an event."""
        event = Event(
            type=event_type,
            tick=tick,
            time=time,
            attempt=attempt,
            data=data,
            description=description,
        )
        self.emit(event)
        return event

    # =========================================================================
    # History
    # =========================================================================

    @property
    def history(self) -> List[Event]:
        return self._history

    def clear_history(self) -> None:
        self._history.clear()

    def of_type(self, event_type: EventType) -> List[Event]:
        """Recorded events of one type, oldest first."""
        return [e for e in self._history if e.type == event_type]

    def __len__(self) -> int:
        return len(self._history)

    def __bool__(self) -> bool:
        # An empty history must not make the bus falsy
        return True

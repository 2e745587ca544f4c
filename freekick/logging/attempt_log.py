"""In-memory attempt log built from simulation events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from rich.table import Table
from rich.text import Text

from freekick.core.events import Event, EventBus, EventType


OUTCOME_STYLES = {
    "goal": "bold #2e7d32",
    "blocked_by_wall": "bold #c62828",
    "saved": "bold #c62828",
    "over_the_bar": "#f57c00",
    "wide": "#f57c00",
    "weak_effort": "#666666",
}


@dataclass
class AttemptLogEntry:
    """Single attempt in the log."""

    number: int
    outcome: str
    message: str
    flight_frame: int
    power: Optional[float] = None
    direction_offset: Optional[float] = None
    curve: Optional[float] = None
    dip: Optional[float] = None
    score_after: Optional[int] = None
    lives_after: Optional[int] = None

    @property
    def is_goal(self) -> bool:
        return self.outcome == "goal"

    def format(self) -> str:
        """Format entry for display (plain text)."""
        aim = ""
        if self.power is not None:
            aim = (
                f" [power {self.power:.0f}, offset {self.direction_offset:+.1f}, "
                f"curve {self.curve:+.1f}, dip {self.dip:+.1f}]"
            )
        return f"#{self.number} {self.message}{aim}"

    def format_rich(self) -> Text:
        """Format entry for display with Rich styling."""
        text = Text()
        text.append(f"#{self.number:<3}", style="#666666")
        text.append(" │ ", style="#999999")
        text.append(self.message, style=OUTCOME_STYLES.get(self.outcome, ""))
        if self.power is not None:
            text.append(
                f"  power {self.power:.0f}  offset {self.direction_offset:+.1f}"
                f"  curve {self.curve:+.1f}  dip {self.dip:+.1f}",
                style="#666666",
            )
        return text


class AttemptLog:
    """Accumulates one entry per resolved attempt.

    Usage:
        log = AttemptLog()
        log.attach(sim.event_bus)
        ...
        console.print(log.summary_table())
    """

    def __init__(self) -> None:
        self.entries: List[AttemptLogEntry] = []
        self.final_score: Optional[int] = None
        self._pending_kick: Optional[dict] = None
        self._awaiting_settle: Optional[AttemptLogEntry] = None

    def attach(self, bus: EventBus) -> None:
        bus.subscribe_all(self.on_event)

    def on_event(self, event: Event) -> None:
        if event.type == EventType.KICK:
            self._pending_kick = dict(event.data)
        elif event.type == EventType.OUTCOME:
            kick = self._pending_kick or {}
            entry = AttemptLogEntry(
                number=event.attempt or len(self.entries) + 1,
                outcome=event.data["kind"],
                message=event.data["message"],
                flight_frame=event.data.get("flight_frame", 0),
                power=kick.get("power"),
                direction_offset=kick.get("direction_offset"),
                curve=kick.get("curve"),
                dip=kick.get("dip"),
            )
            self.entries.append(entry)
            self._awaiting_settle = entry
            self._pending_kick = None
        elif event.type == EventType.SCORE_CHANGED and self._awaiting_settle:
            self._awaiting_settle.score_after = event.data["score"]
            self._awaiting_settle = None
        elif event.type == EventType.LIVES_CHANGED and self._awaiting_settle:
            self._awaiting_settle.lives_after = event.data["lives"]
            self._awaiting_settle = None
        elif event.type == EventType.GAME_OVER:
            self.final_score = event.data["final_score"]
        elif event.type == EventType.SESSION_RESET:
            self._pending_kick = None
            self._awaiting_settle = None
            self.final_score = None

    @property
    def goals(self) -> int:
        return sum(1 for e in self.entries if e.is_goal)

    def format(self) -> str:
        return "\n".join(entry.format() for entry in self.entries)

    def summary_table(self) -> Table:
        """Rich table of every attempt."""
        table = Table(title="Free kicks")
        table.add_column("#", justify="right")
        table.add_column("Outcome")
        table.add_column("Power", justify="right")
        table.add_column("Offset", justify="right")
        table.add_column("Curve", justify="right")
        table.add_column("Dip", justify="right")
        table.add_column("Frames", justify="right")

        for entry in self.entries:
            table.add_row(
                str(entry.number),
                Text(entry.message, style=OUTCOME_STYLES.get(entry.outcome, "")),
                f"{entry.power:.0f}" if entry.power is not None else "-",
                f"{entry.direction_offset:+.1f}" if entry.direction_offset is not None else "-",
                f"{entry.curve:+.1f}" if entry.curve is not None else "-",
                f"{entry.dip:+.1f}" if entry.dip is not None else "-",
                str(entry.flight_frame),
            )
        return table

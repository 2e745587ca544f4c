"""Frame counter and session time.

Physics advances one step per frame regardless of the reported delta; the
clock only sums the deltas so that the settle window after an outcome can
be measured in seconds without timers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


DEFAULT_FRAME_DT = 1.0 / 60.0  # One display refresh at 60 Hz


@dataclass
class Clock:
    """Frames advanced and seconds reported, plus named marks.

    Attributes:
        current_time: Sum of the deltas passed to ``tick``
        tick_count: Number of frames advanced
    """
    current_time: float = 0.0
    tick_count: int = 0
    _marks: Dict[str, Tuple[float, int]] = field(default_factory=dict)

    def tick(self, dt: float = DEFAULT_FRAME_DT) -> float:
        """Count one frame of ``dt`` seconds (negative deltas count as 0)."""
        dt = max(0.0, dt)
        self.current_time += dt
        self.tick_count += 1
        return dt

    def mark_event(self, name: str) -> None:
        """Remember the current time and frame under ``name``."""
        self._marks[name] = (self.current_time, self.tick_count)

    def clear_event(self, name: str) -> None:
        self._marks.pop(name, None)

    def time_since(self, name: str) -> Optional[float]:
        """Seconds since the mark, or None if it is not set."""
        mark = self._marks.get(name)
        return None if mark is None else self.current_time - mark[0]

    def ticks_since(self, name: str) -> Optional[int]:
        """Frames since the mark, or None if it is not set."""
        mark = self._marks.get(name)
        return None if mark is None else self.tick_count - mark[1]

    def __repr__(self) -> str:
        return f"Clock(time={self.current_time:.3f}s, tick={self.tick_count})"

"""Session-level state that persists across attempts.

Tracks the scoreboard (score and lives) and a short history of attempts.
Score only ever goes up; lives only go down. Both are reinitialised on a
full session reset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .core.entities import ShotParameters
from .resolution.outcome import AttemptOutcome


@dataclass
class AttemptRecord:
    """Record of a single attempt."""
    number: int
    outcome: AttemptOutcome
    shot: ShotParameters
    flight_frames: int
    distance: float  # Ground distance travelled by the time it was decided


@dataclass
class AttemptHistory:
    """Recent attempts for end-of-session summaries."""
    attempts: List[AttemptRecord] = field(default_factory=list)
    max_history: int = 50

    def record(self, record: AttemptRecord) -> None:
        self.attempts.append(record)
        if len(self.attempts) > self.max_history:
            self.attempts.pop(0)

    def outcome_counts(self) -> Dict[AttemptOutcome, int]:
        """How often each outcome occurred."""
        counts = {outcome: 0 for outcome in AttemptOutcome}
        for attempt in self.attempts:
            counts[attempt.outcome] += 1
        return counts

    def conversion_rate(self) -> float:
        """Fraction of recorded attempts that were goals."""
        if not self.attempts:
            return 0.0
        goals = sum(1 for a in self.attempts if a.outcome.is_goal)
        return goals / len(self.attempts)

    def clear(self) -> None:
        self.attempts.clear()


@dataclass
class SessionState:
    """Scoreboard for one session."""
    starting_lives: int = 3
    score: int = 0
    lives: int = 3
    attempts_taken: int = 0

    @classmethod
    def new(cls, lives: int) -> SessionState:
        return cls(starting_lives=lives, score=0, lives=lives)

    @property
    def is_over(self) -> bool:
        return self.lives <= 0

    def apply(self, outcome: AttemptOutcome) -> None:
        """Apply a settled outcome: a goal scores, anything else costs a life."""
        self.attempts_taken += 1
        if outcome.is_goal:
            self.score += 1
        else:
            self.lives = max(0, self.lives - 1)

    def reset(self) -> None:
        self.score = 0
        self.lives = self.starting_lives
        self.attempts_taken = 0

"""Phase State Machine - Explicit attempt phase transitions.

Attempt Lifecycle:
    AIMING → APPROACH → FLIGHT → RESOLVED

    From RESOLVED (after the settle delay):
        → AIMING (next attempt, fresh scenario)
        → GAME_OVER (no lives left)

    GAME_OVER only leaves through an external reset, which re-enters
    AIMING. A reset may also interrupt any other phase; it bypasses the
    table with ``validate=False``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, List


class AttemptPhase(str, Enum):
    """Current phase of a free-kick attempt."""
    AIMING = "aiming"        # Idle, player adjusting aim, power meter running
    APPROACH = "approach"    # Run-up animation, aim frozen
    FLIGHT = "flight"        # Ball live, kinematics and resolver running
    RESOLVED = "resolved"    # Outcome fixed, waiting out the settle delay
    GAME_OVER = "game_over"  # No lives left


VALID_TRANSITIONS: Dict[AttemptPhase, FrozenSet[AttemptPhase]] = {
    AttemptPhase.AIMING: frozenset({AttemptPhase.APPROACH}),
    AttemptPhase.APPROACH: frozenset({AttemptPhase.FLIGHT}),
    AttemptPhase.FLIGHT: frozenset({AttemptPhase.RESOLVED}),
    AttemptPhase.RESOLVED: frozenset({AttemptPhase.AIMING, AttemptPhase.GAME_OVER}),
    AttemptPhase.GAME_OVER: frozenset({AttemptPhase.AIMING}),
}


class InvalidPhaseTransition(Exception):
    """A transition the table does not allow. Always a programming error."""

    def __init__(self, current: AttemptPhase, target: AttemptPhase):
        allowed = sorted(p.value for p in VALID_TRANSITIONS[current])
        super().__init__(f"{current.value} -> {target.value} is not allowed (allowed: {allowed})")
        self.current = current
        self.target = target


@dataclass(frozen=True)
class PhaseTransition:
    """Record of one phase change."""
    from_phase: AttemptPhase
    to_phase: AttemptPhase
    reason: str
    tick: int
    time: float


TransitionCallback = Callable[[PhaseTransition], None]


class PhaseStateMachine:
    """Holds the attempt phase and checks every change against the table.

    Usage:
        fsm = PhaseStateMachine()
        fsm.on_transition(lambda t: print(t.to_phase))
        fsm.transition_to(AttemptPhase.APPROACH, reason="kick", tick=4, time=0.07)
    """

    def __init__(self, initial_phase: AttemptPhase = AttemptPhase.AIMING):
        self._phase = initial_phase
        self._history: List[PhaseTransition] = []
        self._callbacks: List[TransitionCallback] = []

    @property
    def phase(self) -> AttemptPhase:
        return self._phase

    @property
    def history(self) -> List[PhaseTransition]:
        """Transitions so far (a copy)."""
        return list(self._history)

    def can_transition_to(self, target: AttemptPhase) -> bool:
        return target in VALID_TRANSITIONS[self._phase]

    def transition_to(
        self,
        target: AttemptPhase,
        reason: str = "",
        tick: int = 0,
        time: float = 0.0,
        validate: bool = True,
    ) -> PhaseTransition:
        """Move to ``target`` and notify callbacks.

        Raises:
            InvalidPhaseTransition: If ``validate`` and the table forbids it
        """
        if validate and not self.can_transition_to(target):
            raise InvalidPhaseTransition(self._phase, target)

        transition = PhaseTransition(self._phase, target, reason, tick, time)
        self._phase = target
        self._history.append(transition)
        for callback in self._callbacks:
            callback(transition)
        return transition

    def on_transition(self, callback: TransitionCallback) -> None:
        self._callbacks.append(callback)

    @property
    def is_aiming(self) -> bool:
        """True while the player may still adjust the aim."""
        return self._phase == AttemptPhase.AIMING

    @property
    def ball_is_live(self) -> bool:
        """True while the ball moves under physics."""
        return self._phase in (AttemptPhase.FLIGHT, AttemptPhase.RESOLVED)

    @property
    def is_terminal(self) -> bool:
        return self._phase == AttemptPhase.GAME_OVER

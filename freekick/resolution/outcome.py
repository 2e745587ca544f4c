"""Collision and outcome resolution.

Runs once per flight frame until the attempt is resolved. Checks are
evaluated nearest-obstacle-first and the first match wins:

    wall → keeper → goal line → stall

When the ball is inside a wall box and the keeper's save band in the same
frame, the wall takes it. A save in the same frame as the goal-line
crossing counts as a save. Once an outcome is recorded the resolver is
latched: later calls return the same outcome and touch nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import FreeKickConfig
from ..core.entities import Ball, Scenario, Wind
from ..core.vec import Vec3

logger = logging.getLogger(__name__)


# =============================================================================
# Impulses
# =============================================================================

WALL_REBOUND = -0.3        # Horizontal velocity multiplier off the wall
WALL_POP_UP = 2.0          # Vertical velocity after a block
KEEPER_REBOUND_X = -0.4    # Parry sideways
KEEPER_REBOUND_Y = -0.2    # Parry back into play


class AttemptOutcome(str, Enum):
    """How an attempt ended."""
    GOAL = "goal"
    BLOCKED_BY_WALL = "blocked_by_wall"
    SAVED = "saved"
    OVER_THE_BAR = "over_the_bar"
    WIDE = "wide"
    WEAK_EFFORT = "weak_effort"

    @property
    def is_goal(self) -> bool:
        return self == AttemptOutcome.GOAL

    @property
    def is_contact(self) -> bool:
        """True if the ball hit a defender (longer settle delay)."""
        return self in (AttemptOutcome.BLOCKED_BY_WALL, AttemptOutcome.SAVED)

    @property
    def message(self) -> str:
        """Message shown to the player."""
        return OUTCOME_MESSAGES[self]


OUTCOME_MESSAGES = {
    AttemptOutcome.GOAL: "GOAL! Sensational Strike!",
    AttemptOutcome.BLOCKED_BY_WALL: "Blocked by the wall!",
    AttemptOutcome.SAVED: "What a save by the keeper!",
    AttemptOutcome.OVER_THE_BAR: "Over the bar! Needed more dip.",
    AttemptOutcome.WIDE: "Wide of the mark.",
    AttemptOutcome.WEAK_EFFORT: "Weak effort. The keeper scoops it up.",
}


@dataclass(frozen=True)
class ShotResolution:
    """The outcome of an attempt and where it was decided."""
    outcome: AttemptOutcome
    flight_frame: int
    position: Vec3
    settle_delay: float

    def format_description(self) -> str:
        """Human-readable description."""
        return (
            f"{self.outcome.message} "
            f"(frame {self.flight_frame}, x={self.position.x:.1f}, "
            f"y={self.position.y:.1f}, height={self.position.z:.1f})"
        )


class OutcomeResolver:
    """Decides the single outcome of an attempt.

    Usage:
        resolver = OutcomeResolver(config)
        resolution = resolver.check(ball, scenario, flight_frame)
        if resolution:
            ...  # first and only resolution for this attempt
    """

    def __init__(self, config: FreeKickConfig):
        self.config = config
        self.resolution: Optional[ShotResolution] = None

    @property
    def resolved(self) -> bool:
        return self.resolution is not None

    def reset(self) -> None:
        """Arm the resolver for a new attempt."""
        self.resolution = None

    def check(self, ball: Ball, scenario: Scenario, flight_frame: int) -> Optional[ShotResolution]:
        """Run this frame's checks.

        Args:
            ball: Live ball, already integrated for this frame
            scenario: Wall and keeper for the attempt
            flight_frame: Frames since the strike (1 on the first flight frame)

        Returns:
            The resolution if it was decided on this frame, else None
        """
        if self.resolved:
            return None

        outcome = (
            self._check_wall(ball, scenario)
            or self._check_keeper(ball, scenario)
            or self._check_goal_line(ball)
            or self._check_stall(ball, scenario.wind, flight_frame)
        )
        if outcome is None:
            return None

        session = self.config.session
        delay = session.contact_settle_delay if outcome.is_contact else session.settle_delay
        self.resolution = ShotResolution(
            outcome=outcome,
            flight_frame=flight_frame,
            position=ball.pos,
            settle_delay=delay,
        )
        logger.debug("Resolved: %s", self.resolution.format_description())
        return self.resolution

    # =========================================================================
    # Checks
    # =========================================================================

    def _check_wall(self, ball: Ball, scenario: Scenario) -> Optional[AttemptOutcome]:
        if ball.pos.z >= self.config.wall.block_height:
            return None
        if scenario.first_blocker(ball.pos.x, ball.pos.y) is None:
            return None

        vel = ball.velocity
        ball.velocity = Vec3(vel.x * WALL_REBOUND, vel.y * WALL_REBOUND, WALL_POP_UP)
        return AttemptOutcome.BLOCKED_BY_WALL

    def _check_keeper(self, ball: Ball, scenario: Scenario) -> Optional[AttemptOutcome]:
        keeper = scenario.keeper
        reach = self.config.keeper.hand_reach
        x, y, z = ball.pos.x, ball.pos.y, ball.pos.z

        if not keeper.left < x < keeper.right:
            return None
        if not keeper.y - reach < y < keeper.y + reach:
            return None
        if z >= keeper.z + keeper.height:
            return None

        vel = ball.velocity
        ball.velocity = Vec3(vel.x * KEEPER_REBOUND_X, vel.y * KEEPER_REBOUND_Y, vel.z)
        return AttemptOutcome.SAVED

    def _check_goal_line(self, ball: Ball) -> Optional[AttemptOutcome]:
        goal = self.config.goal
        line = goal.line_y

        crossed = ball.pos.y <= line < ball.prev_pos.y
        if not crossed:
            return None

        if goal.x < ball.pos.x < goal.x + goal.width:
            if ball.pos.z <= goal.crossbar_height:
                return AttemptOutcome.GOAL
            return AttemptOutcome.OVER_THE_BAR
        return AttemptOutcome.WIDE

    def stall_threshold(self, wind: Wind) -> float:
        """Forward speed below which a grounded ball counts as dead.

        A rolling ball under a constant wind settles at
        ``wind * k / (1 - k)`` (k = drag * rolling friction) instead of
        stopping, so that drift is added to the base stall speed.
        """
        physics = self.config.physics
        k = physics.drag * physics.rolling_friction
        drift = abs(wind.y) * k / (1 - k) if k < 1 else 0.0
        return physics.stall_speed + drift

    def _check_stall(self, ball: Ball, wind: Wind, flight_frame: int) -> Optional[AttemptOutcome]:
        # A ball that has not left the spot yet cannot have stalled.
        if flight_frame < 1 or ball.distance_travelled() <= 0:
            return None
        if not ball.is_grounded:
            return None
        if abs(ball.velocity.y) < self.stall_threshold(wind):
            return AttemptOutcome.WEAK_EFFORT
        return None

"""Keeper Brain - Reactive goalkeeper behaviour.

Two independent axes, re-evaluated each frame while the attempt is live
and the ball has gone past the wall:

- Horizontal: shuffle toward the ball's x at fixed speed, hold inside a
  small dead zone
- Vertical: one jump, the first time the ball is close to goal and in the
  air; gravity brings the keeper back down

Purely reactive; no prediction of where the ball will cross the line.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import FreeKickConfig
from ..core.entities import Ball, Goalkeeper, Scenario, clamp


@dataclass
class KeeperDecision:
    """What the keeper chose to do this frame."""
    vx: float = 0.0
    jump: bool = False
    reasoning: str = ""

    @classmethod
    def hold(cls, reasoning: str = "set") -> KeeperDecision:
        return cls(vx=0.0, jump=False, reasoning=reasoning)


class GoalkeeperController:
    """Drives the keeper from the live ball position."""

    def __init__(self, config: FreeKickConfig):
        self.config = config

    def is_triggered(self, ball: Ball, scenario: Scenario) -> bool:
        """True once the ball has gone past the wall."""
        return ball.pos.y < scenario.wall_depth + self.config.keeper.wall_trigger_margin

    def decide(self, keeper: Goalkeeper, ball: Ball, scenario: Scenario) -> KeeperDecision:
        """Choose horizontal velocity and whether to jump."""
        cfg = self.config.keeper

        if not self.is_triggered(ball, scenario):
            return KeeperDecision(vx=keeper.vx, reasoning="waiting for the ball to clear the wall")

        offset = ball.pos.x - keeper.x
        if offset > cfg.dead_zone:
            decision = KeeperDecision(vx=cfg.speed, reasoning="shuffle right")
        elif offset < -cfg.dead_zone:
            decision = KeeperDecision(vx=-cfg.speed, reasoning="shuffle left")
        else:
            decision = KeeperDecision.hold("square to the ball")

        near_goal = ball.pos.y < self.config.goal.y + cfg.jump_trigger_depth
        in_air = ball.pos.z > cfg.jump_trigger_height
        if near_goal and in_air and keeper.is_grounded and not keeper.has_jumped:
            decision.jump = True
            decision.reasoning += ", jump"

        return decision

    def apply(self, keeper: Goalkeeper, decision: KeeperDecision) -> None:
        """Apply a decision to the keeper's velocity."""
        keeper.vx = decision.vx
        if decision.jump:
            keeper.vz = self.config.keeper.jump_velocity
            keeper.has_jumped = True

    def integrate(self, keeper: Goalkeeper) -> None:
        """Advance the keeper one frame, clamped to the goal mouth."""
        goal = self.config.goal

        keeper.x += keeper.vx
        keeper.z += keeper.vz
        if keeper.z > 0:
            keeper.vz -= self.config.physics.gravity
        else:
            keeper.z = 0.0
            keeper.vz = 0.0

        half = keeper.width / 2
        keeper.x = clamp(keeper.x, goal.x + half, goal.x + goal.width - half)

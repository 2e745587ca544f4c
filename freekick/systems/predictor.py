"""Trajectory preview - forward simulation of the current aim.

Runs the same integration step and launch mapping as a real kick on a
private copy of the state, so what the player sees is what a kick taken
now would do (until the first ground contact, where the preview stops).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..config import FreeKickConfig
from ..core.entities import ShotParameters, Wind
from ..core.vec import Vec3
from ..physics.kinematics import FlightEnvironment, integrate_step, launch_velocity, visual_y


@dataclass(frozen=True)
class TrajectoryPoint:
    """One predicted ball position."""
    x: float
    y: float
    z: float
    visual_y: float


class TrajectoryPredictor:
    """Predicts the flight of a kick without touching live state."""

    def __init__(self, config: FreeKickConfig):
        self.config = config

    def predict(
        self,
        start: Vec3,
        base_angle: float,
        shot: ShotParameters,
        wind: Wind,
        steps: Optional[int] = None,
    ) -> List[TrajectoryPoint]:
        """Simulate up to ``steps`` frames of flight.

        Args:
            start: Ball rest position
            base_angle: Heading from ball to goal centre (radians)
            shot: Current (unfrozen) aim
            wind: Wind for the attempt
            steps: Frame budget (defaults to the configured prediction length)

        Returns:
            Positions after each frame. The last point is on the ground if
            the ball came back down within the budget.
        """
        physics = self.config.physics
        if steps is None:
            steps = self.config.session.prediction_steps

        env = FlightEnvironment.for_shot(physics, wind, shot)
        pos = start
        vel = launch_velocity(base_angle, shot, self.config.shot)

        points: List[TrajectoryPoint] = []
        for _ in range(steps):
            pos, vel = integrate_step(pos, vel, env)
            if pos.z <= 0:
                points.append(TrajectoryPoint(pos.x, pos.y, 0.0, pos.y))
                break
            points.append(TrajectoryPoint(pos.x, pos.y, pos.z, visual_y(pos.y, pos.z, physics)))
        return points

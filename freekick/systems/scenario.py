"""Scenario generation - spawn, wall, keeper and wind for each attempt.

The wall is set on a line perpendicular to the ball→goal direction, a
fixed fraction of the way to goal, so it always faces the kick wherever
the ball spawns. The base aim angle points at the goal centre for the
same reason: a zero offset is always a shot at the middle of the goal.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from ..config import FreeKickConfig
from ..core.entities import Ball, Goalkeeper, Scenario, WallPlayer, Wind
from ..core.vec import Vec2

logger = logging.getLogger(__name__)


class ScenarioGenerator:
    """Produces a fresh scenario for every attempt.

    Usage:
        generator = ScenarioGenerator(config, rng=random.Random(7))
        scenario = generator.generate()

        # Scripted set piece
        scenario = generator.build(ball_x=560, ball_y=400, wall_size=0)
    """

    def __init__(self, config: FreeKickConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng or random.Random()

    def generate(self) -> Scenario:
        """Sample a new scenario."""
        pitch = self.config.pitch
        wall = self.config.wall

        ball_x = self.rng.random() * pitch.spawn_x_range + pitch.spawn_x_min
        ball_y = self.rng.random() * pitch.spawn_y_range + pitch.spawn_y_min
        wall_size = self.rng.randint(wall.min_players, wall.max_players)
        wind = Wind(
            x=self.rng.random() * 2 * pitch.wind_limit - pitch.wind_limit,
            y=self.rng.random() * 2 * pitch.wind_limit - pitch.wind_limit,
        )

        scenario = self.build(ball_x, ball_y, wall_size, wind)
        logger.debug(
            "Scenario: ball=(%.1f, %.1f) wall=%d wind=(%.4f, %.4f)",
            ball_x, ball_y, wall_size, wind.x, wind.y,
        )
        return scenario

    def build(
        self,
        ball_x: float,
        ball_y: float,
        wall_size: int,
        wind: Optional[Wind] = None,
    ) -> Scenario:
        """Build a scenario from explicit choices.

        Args:
            ball_x, ball_y: Spawn point
            wall_size: Number of defenders (0 for no wall)
            wind: Wind for the attempt (calm if omitted)
        """
        goal = self.config.goal
        wall = self.config.wall

        ball = Ball.at_rest(ball_x, ball_y, base_radius=self.config.physics.base_radius)

        to_goal = Vec2(goal.center_x - ball_x, goal.y - ball_y)
        base_angle = to_goal.angle()

        wall_center = Vec2(ball_x, ball_y) + Vec2.from_angle(
            base_angle, to_goal.length() * wall.distance_fraction
        )
        along_wall = Vec2.from_angle(base_angle).perpendicular()

        players = []
        for i in range(max(0, wall_size)):
            offset = (i - (wall_size - 1) / 2) * wall.spacing
            anchor = wall_center + along_wall * offset
            players.append(WallPlayer(
                x=anchor.x,
                y=anchor.y,
                width=wall.box_width,
                height=wall.box_depth,
            ))

        return Scenario(
            ball=ball,
            base_angle=base_angle,
            wall=tuple(players),
            wall_center=wall_center,
            keeper=self.reset_keeper(),
            wind=wind or Wind(),
        )

    def reset_keeper(self) -> Goalkeeper:
        """Keeper standing in the middle of the goal mouth."""
        goal = self.config.goal
        keeper = self.config.keeper
        return Goalkeeper(
            x=goal.center_x,
            y=goal.y + keeper.line_offset,
            width=keeper.width,
            height=keeper.height,
        )

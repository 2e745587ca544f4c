"""Ball flight kinematics.

One explicit integration step per frame, shared by the live flight and the
trajectory predictor so the preview foreshadows a real kick exactly.

Per-frame model:
- Position advances with the previous frame's velocity
- Gravity, plus extra downward pull from dip (topspin)
- Magnus curve: the horizontal velocity is rotated by a small angle
  proportional to curve, so the bend grows with speed
- Constant wind push on the horizontal velocity
- Uniform drag on all three components
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from ..config import PhysicsConfig, ShotConfig
from ..core.entities import ShotParameters, Wind
from ..core.vec import Vec2, Vec3


@dataclass(frozen=True)
class FlightEnvironment:
    """Constants that stay fixed for one flight.

    Attributes:
        gravity: Downward acceleration per frame
        drag: Velocity multiplier per frame (< 1)
        magnus_coefficient: Scales curve into a rotation angle per frame
        dip_scale: Scales dip into extra downward acceleration
        wind: Horizontal push per frame
        curve: Sidespin coefficient of the strike
        dip: Topspin coefficient of the strike
    """
    gravity: float
    drag: float
    magnus_coefficient: float
    dip_scale: float
    wind: Vec2
    curve: float = 0.0
    dip: float = 0.0

    @classmethod
    def for_shot(
        cls,
        physics: PhysicsConfig,
        wind: Wind,
        shot: ShotParameters,
    ) -> FlightEnvironment:
        """Build the environment for a strike under the given wind."""
        return cls(
            gravity=physics.gravity,
            drag=physics.drag,
            magnus_coefficient=physics.magnus_coefficient,
            dip_scale=physics.dip_scale,
            wind=wind.vector,
            curve=shot.curve,
            dip=shot.dip,
        )

    @property
    def vertical_acceleration(self) -> float:
        return self.gravity + self.dip * self.dip_scale


def integrate_step(pos: Vec3, vel: Vec3, env: FlightEnvironment) -> Tuple[Vec3, Vec3]:
    """Advance a body by one frame.

    Args:
        pos: Current position
        vel: Current velocity (per frame)
        env: Flight constants

    Returns:
        (new_position, new_velocity)
    """
    new_pos = pos + vel

    vz = vel.z - env.vertical_acceleration

    k = env.curve * env.magnus_coefficient
    vx = vel.x + (-vel.y * k)
    vy = vel.y + vel.x * k

    vx += env.wind.x
    vy += env.wind.y

    new_vel = Vec3(vx, vy, vz) * env.drag
    return new_pos, new_vel


def launch_velocity(base_angle: float, shot: ShotParameters, config: ShotConfig) -> Vec3:
    """Velocity the ball leaves the boot with.

    Args:
        base_angle: Heading (radians) from ball to goal centre
        shot: Aim snapshot
        config: Strike mapping constants

    Returns:
        Launch velocity; horizontal speed scales with power, as does lift
    """
    heading = base_angle + shot.direction_radians
    speed = shot.power * config.power_mult
    return Vec3(
        math.cos(heading) * speed,
        math.sin(heading) * speed,
        shot.power * config.lift_mult + config.lift_base,
    )


def apply_ground_contact(pos: Vec3, vel: Vec3, physics: PhysicsConfig) -> Tuple[Vec3, Vec3, bool]:
    """Resolve contact with the ground.

    A ball at or below the ground is put back on it. A fast descent bounces
    with decay; a slow one stops vertically. Any contact applies rolling
    friction to the horizontal velocity.

    Returns:
        (position, velocity, bounced) - unchanged when the ball is airborne
    """
    if pos.z > 0:
        return pos, vel, False

    bounced = abs(vel.z) > physics.bounce_threshold
    vz = vel.z * -physics.bounce_decay if bounced else 0.0
    friction = physics.rolling_friction
    return (
        pos.with_z(0.0),
        Vec3(vel.x * friction, vel.y * friction, vz),
        bounced,
    )


def render_radius(z: float, physics: PhysicsConfig) -> float:
    """Perspective-scaled radius; never smaller than the base radius."""
    return max(physics.base_radius, physics.base_radius + z * physics.perspective_scale)


def visual_y(y: float, z: float, physics: PhysicsConfig) -> float:
    """Screen y of a point drawn at height z."""
    return y - z * physics.visual_height_scale

"""Simulation entities - ball, wall, goalkeeper, shot parameters.

Entities are plain mutable dataclasses owned by the simulation context.
The shell never touches them directly; it reads snapshots.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .vec import Vec2, Vec3


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value between min and max."""
    return max(min_val, min(max_val, value))


def normalize_degrees(degrees: float) -> float:
    """Wrap an angle in degrees to [-180, 180)."""
    return (degrees + 180.0) % 360.0 - 180.0


# =============================================================================
# Shot Parameters
# =============================================================================

@dataclass(frozen=True)
class ShotParameters:
    """Aim chosen by the player.

    Frozen so a snapshot taken at kick time cannot be changed by later
    input.

    Attributes:
        direction_offset: Degrees added to the base aim angle
        power: Strike power, within the configured power range
        curve: Sidespin coefficient (positive bends toward +angle)
        dip: Topspin coefficient (positive adds downward acceleration)
    """
    direction_offset: float = 0.0
    power: float = 20.0
    curve: float = 0.0
    dip: float = 0.0

    def clamped(
        self,
        power_min: float,
        power_max: float,
        spin_limit: float,
    ) -> ShotParameters:
        """Return a copy with every field inside its valid range."""
        return ShotParameters(
            direction_offset=normalize_degrees(self.direction_offset),
            power=clamp(self.power, power_min, power_max),
            curve=clamp(self.curve, -spin_limit, spin_limit),
            dip=clamp(self.dip, -spin_limit, spin_limit),
        )

    @property
    def direction_radians(self) -> float:
        return math.radians(self.direction_offset)


def contact_to_spin(u: float, v: float) -> Tuple[float, float]:
    """Map a contact point on the ball to (curve, dip).

    ``u`` runs left to right and ``v`` top to bottom across the ball face,
    both as fractions in [0, 1]. Striking left of centre curves the ball
    one way, right of centre the other; striking high adds dip, low adds
    lift.
    """
    u = clamp(u, 0.0, 1.0)
    v = clamp(v, 0.0, 1.0)
    curve = -(u * 10 - 5)
    dip = -(v * 10 - 5)
    return curve, dip


# =============================================================================
# Ball
# =============================================================================

@dataclass
class Ball:
    """The ball.

    ``prev_pos`` holds the position before the latest integration step so
    that a goal-line crossing can be detected even when a single frame
    jumps over the line.
    """
    pos: Vec3 = field(default_factory=Vec3.zero)
    velocity: Vec3 = field(default_factory=Vec3.zero)
    prev_pos: Vec3 = field(default_factory=Vec3.zero)
    start: Vec2 = field(default_factory=Vec2.zero)
    target_velocity: Vec3 = field(default_factory=Vec3.zero)
    base_radius: float = 6.0
    render_radius: float = 6.0

    @classmethod
    def at_rest(cls, x: float, y: float, base_radius: float = 6.0) -> Ball:
        """Create a ball resting on the spot."""
        spot = Vec3(x, y, 0.0)
        return cls(
            pos=spot,
            prev_pos=spot,
            start=Vec2(x, y),
            base_radius=base_radius,
            render_radius=base_radius,
        )

    @property
    def is_grounded(self) -> bool:
        return self.pos.z <= 0.0

    def distance_travelled(self) -> float:
        """Ground distance from the spawn point."""
        return self.start.distance_to(self.pos.ground)


# =============================================================================
# Wall
# =============================================================================

@dataclass(frozen=True)
class WallPlayer:
    """One defender in the wall: an axis-aligned ground-plane box.

    (x, y) is the anchor on the wall line; the box spans
    (x, x + width) by (y, y + height).
    """
    x: float
    y: float
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        """True if the ground point lies strictly inside the box."""
        return self.x < x < self.x + self.width and self.y < y < self.y + self.height


# =============================================================================
# Goalkeeper
# =============================================================================

@dataclass
class Goalkeeper:
    """The goalkeeper. ``x`` is the centre of the body."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    vx: float = 0.0
    vz: float = 0.0
    width: float = 35.0
    height: float = 55.0
    has_jumped: bool = False

    @property
    def is_grounded(self) -> bool:
        return self.z <= 0.0

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2


# =============================================================================
# Wind
# =============================================================================

@dataclass(frozen=True)
class Wind:
    """Constant per-frame push on the ball, fixed for one attempt."""
    x: float = 0.0
    y: float = 0.0

    @property
    def vector(self) -> Vec2:
        return Vec2(self.x, self.y)

    @property
    def angle_degrees(self) -> float:
        """Heading of the wind for display (0 = +X)."""
        return math.degrees(math.atan2(self.y, self.x))


# =============================================================================
# Scenario
# =============================================================================

@dataclass
class Scenario:
    """Everything generated for one attempt.

    Attributes:
        ball: Ball at its spawn point
        base_angle: Heading (radians) from the ball to the goal centre
        wall: Defender boxes, ordered along the wall line
        wall_center: Centre of the wall line (defined even for an empty wall)
        keeper: Goalkeeper at the centre of the goal mouth
        wind: Wind for the attempt
    """
    ball: Ball
    base_angle: float
    wall: Tuple[WallPlayer, ...]
    wall_center: Vec2
    keeper: Goalkeeper
    wind: Wind = field(default_factory=Wind)

    @property
    def wall_depth(self) -> float:
        """Y coordinate the keeper treats as the wall's depth (nearest the goal)."""
        if self.wall:
            return min(player.y for player in self.wall)
        return self.wall_center.y

    def first_blocker(self, x: float, y: float) -> Optional[WallPlayer]:
        """First wall box containing the ground point, if any."""
        for player in self.wall:
            if player.contains(x, y):
                return player
        return None

"""Pitch vectors.

Coordinates are in pitch units, velocities in pitch units per frame:
    +X = right, seen from behind the kicker
    +Y = back toward the kicker (the goal sits at small y)
    +Z = height above the ground plane

Shots travel toward decreasing y.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vec2:
    """Point or direction on the ground plane."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vec2) -> float:
        return (other - self).length()

    def angle(self) -> float:
        """Heading in radians, measured from +X (atan2, so defined for x = 0)."""
        return math.atan2(self.y, self.x)

    def perpendicular(self) -> Vec2:
        """This direction turned a quarter turn toward +angle."""
        return Vec2(-self.y, self.x)

    def lerp(self, other: Vec2, t: float) -> Vec2:
        return self + (other - self) * t

    @classmethod
    def zero(cls) -> Vec2:
        return cls(0.0, 0.0)

    @classmethod
    def from_angle(cls, radians: float, length: float = 1.0) -> Vec2:
        return cls(math.cos(radians) * length, math.sin(radians) * length)

    def __repr__(self) -> str:
        return f"Vec2({self.x:.2f}, {self.y:.2f})"


@dataclass(frozen=True, slots=True)
class Vec3:
    """Ball position or velocity: ground-plane x/y plus height z."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    @property
    def ground(self) -> Vec2:
        """Shadow on the ground plane."""
        return Vec2(self.x, self.y)

    def with_z(self, z: float) -> Vec3:
        return Vec3(self.x, self.y, z)

    @classmethod
    def zero(cls) -> Vec3:
        return cls(0.0, 0.0, 0.0)

    def __repr__(self) -> str:
        return f"Vec3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

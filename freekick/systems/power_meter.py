"""Oscillating power meter shown while the player is aiming."""

from __future__ import annotations

from ..config import ShotConfig
from ..core.entities import clamp


class PowerMeter:
    """Sweeps power between the configured bounds, bouncing at each end.

    A speed of 0 freezes the meter so power is set only through
    ``set``.
    """

    def __init__(self, config: ShotConfig):
        self.config = config
        self.value: float = config.power_min
        self.direction: int = 1

    def tick(self) -> float:
        """Advance one frame and return the new value."""
        speed = self.config.power_meter_speed
        if speed <= 0:
            return self.value

        self.value += speed * self.direction
        if self.value >= self.config.power_max:
            self.value = self.config.power_max
            self.direction = -1
        elif self.value <= self.config.power_min:
            self.value = self.config.power_min
            self.direction = 1
        return self.value

    def set(self, power: float) -> float:
        """Set the meter directly (clamped)."""
        self.value = clamp(power, self.config.power_min, self.config.power_max)
        return self.value

    @property
    def fraction(self) -> float:
        """Position of the cursor along the meter, 0..1."""
        span = self.config.power_max - self.config.power_min
        return (self.value - self.config.power_min) / span

    def reset(self) -> None:
        self.value = self.config.power_min
        self.direction = 1

"""Tuning configuration for the free-kick engine.

Every constant the engine uses lives here, in one validated structure.
All rates are per frame (frame-coupled): velocities are pitch units per
frame and accelerations are per frame squared. Only the settle delays and
the default frame delta are in seconds.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, model_validator


class PhysicsConfig(BaseModel):
    """Ball flight and ground contact."""

    gravity: float = Field(default=0.2, ge=0.0)
    drag: float = Field(default=0.992, gt=0.0, le=1.0)
    magnus_coefficient: float = Field(default=0.006, ge=0.0)
    dip_scale: float = Field(default=0.02, ge=0.0)
    bounce_decay: float = Field(default=0.5, ge=0.0, lt=1.0)
    bounce_threshold: float = Field(default=1.0, ge=0.0)
    rolling_friction: float = Field(default=0.85, gt=0.0, le=1.0)
    stall_speed: float = Field(default=0.1, gt=0.0)

    # Presentation helpers
    base_radius: float = Field(default=6.0, gt=0.0)
    perspective_scale: float = Field(default=0.12, ge=0.0)
    visual_height_scale: float = Field(default=0.5, ge=0.0)


class GoalConfig(BaseModel):
    """Goal mouth geometry. The goal line sits at ``y + height``."""

    x: float = 500.0
    y: float = 100.0
    width: float = Field(default=120.0, gt=0.0)
    height: float = Field(default=40.0, gt=0.0)
    crossbar_height: float = Field(default=60.0, gt=0.0)

    @property
    def line_y(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


class PitchConfig(BaseModel):
    """Region in which the ball spawns."""

    spawn_x_min: float = 150.0
    spawn_x_range: float = Field(default=150.0, ge=0.0)
    spawn_y_min: float = 350.0
    spawn_y_range: float = Field(default=100.0, ge=0.0)
    wind_limit: float = Field(default=0.03, ge=0.0)


class WallConfig(BaseModel):
    """Defensive wall formation."""

    min_players: int = Field(default=3, ge=0)
    max_players: int = Field(default=6, ge=0)
    distance_fraction: float = Field(default=0.35, gt=0.0, lt=1.0)
    spacing: float = Field(default=16.0, ge=0.0)
    box_width: float = Field(default=20.0, gt=0.0)
    box_depth: float = Field(default=50.0, gt=0.0)
    block_height: float = Field(default=50.0, gt=0.0)

    @model_validator(mode="after")
    def _check_player_range(self) -> WallConfig:
        if self.min_players > self.max_players:
            raise ValueError("min_players must not exceed max_players")
        return self


class KeeperConfig(BaseModel):
    """Goalkeeper body and reaction rule."""

    width: float = Field(default=35.0, gt=0.0)
    height: float = Field(default=55.0, gt=0.0)
    speed: float = Field(default=3.0, ge=0.0)
    jump_velocity: float = Field(default=4.0, ge=0.0)
    dead_zone: float = Field(default=5.0, ge=0.0)
    line_offset: float = 10.0           # Keeper y relative to goal.y
    hand_reach: float = Field(default=10.0, ge=0.0)  # Half-depth of the save band
    wall_trigger_margin: float = 30.0   # Reacts once ball.y < wall depth + margin
    jump_trigger_depth: float = 60.0    # Jumps once ball.y < goal.y + depth
    jump_trigger_height: float = 10.0   # ... and the ball is above this height


class ShotConfig(BaseModel):
    """Strike mapping from aim parameters to launch velocity."""

    power_min: float = 20.0
    power_max: float = 100.0
    power_mult: float = Field(default=0.24, gt=0.0)
    lift_mult: float = Field(default=0.04, ge=0.0)
    lift_base: float = Field(default=1.0, ge=0.0)
    spin_limit: float = Field(default=5.0, ge=0.0)
    runup_step: float = Field(default=8.0, gt=0.0)  # Run-up progress per frame (of 100)
    power_meter_speed: float = Field(default=1.0, ge=0.0)

    @model_validator(mode="after")
    def _check_power_range(self) -> ShotConfig:
        if self.power_min >= self.power_max:
            raise ValueError("power_min must be below power_max")
        return self


class SessionConfig(BaseModel):
    """Session rules and presentation timing."""

    lives: int = Field(default=3, ge=1)
    contact_settle_delay: float = Field(default=0.8, ge=0.0)  # Wall / keeper
    settle_delay: float = Field(default=0.5, ge=0.0)          # Everything else
    trail_length: int = Field(default=20, ge=0)
    prediction_steps: int = Field(default=60, ge=0)
    frame_dt: float = Field(default=1.0 / 60.0, gt=0.0)


class FreeKickConfig(BaseModel):
    """Complete engine configuration."""

    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    goal: GoalConfig = Field(default_factory=GoalConfig)
    pitch: PitchConfig = Field(default_factory=PitchConfig)
    wall: WallConfig = Field(default_factory=WallConfig)
    keeper: KeeperConfig = Field(default_factory=KeeperConfig)
    shot: ShotConfig = Field(default_factory=ShotConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    @model_validator(mode="after")
    def _check_keeper_fits(self) -> FreeKickConfig:
        if self.keeper.width > self.goal.width:
            raise ValueError("keeper width must fit inside the goal mouth")
        return self


def load_config(path: Union[str, Path]) -> FreeKickConfig:
    """Load a configuration from a JSON file.

    Missing sections fall back to defaults.

    Raises:
        pydantic.ValidationError: If any value is out of range
    """
    return FreeKickConfig.model_validate_json(Path(path).read_text())

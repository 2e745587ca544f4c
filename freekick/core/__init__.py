"""Core layer - foundational types and utilities."""

from .vec import Vec2, Vec3
from .entities import (
    Ball,
    Goalkeeper,
    Scenario,
    ShotParameters,
    WallPlayer,
    Wind,
    clamp,
    contact_to_spin,
    normalize_degrees,
)
from .clock import Clock, DEFAULT_FRAME_DT
from .events import Event, EventType, EventBus
from .phases import AttemptPhase, PhaseStateMachine, InvalidPhaseTransition

__all__ = [
    "Vec2",
    "Vec3",
    "Ball",
    "Goalkeeper",
    "Scenario",
    "ShotParameters",
    "WallPlayer",
    "Wind",
    "clamp",
    "contact_to_spin",
    "normalize_degrees",
    "Clock",
    "DEFAULT_FRAME_DT",
    "Event",
    "EventType",
    "EventBus",
    "AttemptPhase",
    "PhaseStateMachine",
    "InvalidPhaseTransition",
]

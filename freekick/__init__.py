"""Free-kick simulation engine.

A frame-stepped, rendering-agnostic model of a free-kick mini-game:
- Randomised set piece per attempt (ball spot, wall, keeper, wind)
- Shot parameters mapped to a 3D launch with curve and dip
- Reactive goalkeeper and a single latched outcome per attempt
- Score and lives across a session, observable through an event bus
"""

from freekick.config import FreeKickConfig, load_config
from freekick.core.entities import ShotParameters
from freekick.core.events import EventType
from freekick.core.phases import AttemptPhase
from freekick.orchestrator import FreeKickSimulation
from freekick.resolution.outcome import AttemptOutcome

__version__ = "0.1.0"

__all__ = [
    "AttemptOutcome",
    "AttemptPhase",
    "EventType",
    "FreeKickConfig",
    "FreeKickSimulation",
    "ShotParameters",
    "load_config",
]

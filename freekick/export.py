"""Frame snapshots and JSON export for visualisation.

A ``FrameSnapshot`` is the read-only view the shell draws from. Snapshots
are plain frozen dataclasses holding copies, so nothing the shell does to
them can reach back into the simulation.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .systems.predictor import TrajectoryPoint


@dataclass(frozen=True)
class BallFrame:
    """Ball state for drawing."""
    x: float
    y: float
    z: float
    render_radius: float
    visual_y: float


@dataclass(frozen=True)
class KeeperFrame:
    """Keeper state for drawing."""
    x: float
    y: float
    z: float
    width: float
    height: float


@dataclass(frozen=True)
class WallFrame:
    """One wall box."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class FrameSnapshot:
    """Complete renderable state after a frame."""
    tick: int
    time: float
    phase: str
    ball: BallFrame
    keeper: KeeperFrame
    wall: Tuple[WallFrame, ...]
    trail: Tuple[Tuple[float, float], ...]
    wind: Tuple[float, float]
    wind_angle: float
    predicted: Tuple[TrajectoryPoint, ...]
    score: int
    lives: int
    power: float
    kicker: Tuple[float, float]
    outcome: Optional[str] = None  # Outcome of the current attempt, once decided

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SessionExport:
    """A recorded run of frames."""
    frames: List[FrameSnapshot] = field(default_factory=list)
    outcomes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frame_count": len(self.frames),
            "outcomes": list(self.outcomes),
            "frames": [f.to_dict() for f in self.frames],
        }


class FrameRecorder:
    """Collects snapshots so a session can be replayed or inspected.

    Usage:
        recorder = FrameRecorder(every=2)
        while running:
            sim.advance()
            recorder.record(sim.snapshot())
        recorder.save("session.json")
    """

    def __init__(self, every: int = 1, max_frames: Optional[int] = None):
        self.every = max(1, every)
        self.max_frames = max_frames
        self.export = SessionExport()
        self._seen = 0
        self._last_outcome: Optional[str] = None

    def record(self, snapshot: FrameSnapshot) -> None:
        """Record a snapshot (subject to the sampling interval)."""
        if snapshot.outcome and self._last_outcome is None:
            self.export.outcomes.append(snapshot.outcome)
        self._last_outcome = snapshot.outcome

        self._seen += 1
        if (self._seen - 1) % self.every:
            return
        if self.max_frames is not None and len(self.export.frames) >= self.max_frames:
            return
        self.export.frames.append(snapshot)

    @property
    def frames(self) -> List[FrameSnapshot]:
        return self.export.frames

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.export.to_dict(), indent=indent)

    def save(self, path: Union[str, Path], indent: Optional[int] = 2) -> Path:
        """Write the recording to ``path`` and return it."""
        path = Path(path)
        path.write_text(self.to_json(indent=indent))
        return path

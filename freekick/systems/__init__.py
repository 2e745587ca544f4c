"""Systems - scenario generation, trajectory preview, power meter."""

from .scenario import ScenarioGenerator
from .predictor import TrajectoryPredictor, TrajectoryPoint
from .power_meter import PowerMeter

__all__ = [
    "ScenarioGenerator",
    "TrajectoryPredictor",
    "TrajectoryPoint",
    "PowerMeter",
]

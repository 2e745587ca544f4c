"""Physics layer - flight integration and ground contact."""

from .kinematics import (
    FlightEnvironment,
    integrate_step,
    launch_velocity,
    apply_ground_contact,
    render_radius,
    visual_y,
)

__all__ = [
    "FlightEnvironment",
    "integrate_step",
    "launch_velocity",
    "apply_ground_contact",
    "render_radius",
    "visual_y",
]

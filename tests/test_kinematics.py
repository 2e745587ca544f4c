"""Tests for ball flight kinematics."""

import math

import pytest

from freekick.config import PhysicsConfig, ShotConfig
from freekick.core.entities import ShotParameters, Wind
from freekick.core.vec import Vec2, Vec3
from freekick.physics.kinematics import (
    FlightEnvironment,
    apply_ground_contact,
    integrate_step,
    launch_velocity,
    render_radius,
    visual_y,
)


def make_env(**overrides) -> FlightEnvironment:
    values = dict(
        gravity=0.0,
        drag=1.0,
        magnus_coefficient=0.0,
        dip_scale=0.02,
        wind=Vec2.zero(),
        curve=0.0,
        dip=0.0,
    )
    values.update(overrides)
    return FlightEnvironment(**values)


class TestIntegrateStep:
    """Tests for the per-frame integration step."""

    def test_position_uses_previous_velocity(self):
        """Position should advance by the velocity from before the update."""
        pos, vel = integrate_step(Vec3(0, 0, 0), Vec3(1, 2, 3), make_env(gravity=0.2))

        assert pos == Vec3(1, 2, 3)
        assert vel.z == pytest.approx(2.8)

    def test_dip_adds_downward_acceleration(self):
        """Dip should pull the ball down on top of gravity."""
        env = make_env(gravity=0.2, dip=5.0)
        _, vel = integrate_step(Vec3.zero(), Vec3(0, 0, 3), env)

        assert vel.z == pytest.approx(3 - 0.2 - 5 * 0.02)

    def test_magnus_uses_pre_update_components(self):
        """Both horizontal components should bend from the old velocity."""
        env = make_env(curve=2.0, magnus_coefficient=0.01)
        _, vel = integrate_step(Vec3.zero(), Vec3(3, -4, 0), env)

        assert vel.x == pytest.approx(3 + 4 * 0.02)
        assert vel.y == pytest.approx(-4 + 3 * 0.02)

    def test_wind_then_drag(self):
        """Wind is added before drag scales every component."""
        env = make_env(gravity=0.2, drag=0.5, wind=Vec2(0.1, -0.1))
        _, vel = integrate_step(Vec3.zero(), Vec3.zero(), env)

        assert vel.x == pytest.approx(0.05)
        assert vel.y == pytest.approx(-0.05)
        assert vel.z == pytest.approx(-0.1)

    def test_straight_shot_has_no_drift(self):
        """No curve and no wind should keep the ball on its heading."""
        env = FlightEnvironment.for_shot(PhysicsConfig(), Wind(), ShotParameters(power=100))
        pos = Vec3(560, 400, 0)
        vel = Vec3(0, -24, 5)

        for _ in range(30):
            pos, vel = integrate_step(pos, vel, env)

        assert pos.x == pytest.approx(560)
        assert pos.y < 400

    def test_curve_bends_toward_positive_angle(self):
        """Positive curve should swing a shot heading -y toward +x."""
        env = FlightEnvironment.for_shot(PhysicsConfig(), Wind(), ShotParameters(power=100, curve=5))
        pos = Vec3(560, 400, 0)
        vel = Vec3(0, -24, 5)

        for _ in range(10):
            pos, vel = integrate_step(pos, vel, env)

        assert pos.x > 560


class TestFlightEnvironment:
    """Tests for FlightEnvironment."""

    def test_for_shot_copies_constants(self):
        physics = PhysicsConfig()
        env = FlightEnvironment.for_shot(physics, Wind(0.01, -0.02), ShotParameters(curve=2, dip=-1))

        assert env.gravity == physics.gravity
        assert env.drag == physics.drag
        assert env.wind == Vec2(0.01, -0.02)
        assert env.curve == 2
        assert env.dip == -1

    def test_backspin_reduces_fall(self):
        """Negative dip should reduce the downward acceleration."""
        env = FlightEnvironment.for_shot(PhysicsConfig(), Wind(), ShotParameters(dip=-5))
        assert env.vertical_acceleration == pytest.approx(0.1)


class TestLaunchVelocity:
    """Tests for mapping aim to launch velocity."""

    def test_full_power_straight(self):
        vel = launch_velocity(-math.pi / 2, ShotParameters(power=100), ShotConfig())

        assert vel.x == pytest.approx(0, abs=1e-9)
        assert vel.y == pytest.approx(-24)
        assert vel.z == pytest.approx(5)

    def test_direction_offset_rotates_heading(self):
        """A 90 degree offset should turn a -y heading into +x."""
        vel = launch_velocity(-math.pi / 2, ShotParameters(direction_offset=90, power=50), ShotConfig())

        assert vel.x == pytest.approx(12)
        assert vel.y == pytest.approx(0, abs=1e-9)
        assert vel.z == pytest.approx(3)


class TestGroundContact:
    """Tests for bounce and rolling friction."""

    def test_airborne_untouched(self):
        pos, vel, bounced = apply_ground_contact(Vec3(0, 0, 1), Vec3(1, 1, -5), PhysicsConfig())

        assert pos == Vec3(0, 0, 1)
        assert vel == Vec3(1, 1, -5)
        assert not bounced

    def test_fast_descent_bounces(self):
        pos, vel, bounced = apply_ground_contact(Vec3(0, 0, -1), Vec3(2, -4, -3), PhysicsConfig())

        assert bounced
        assert pos.z == 0
        assert vel.z == pytest.approx(1.5)
        assert vel.x == pytest.approx(1.7)
        assert vel.y == pytest.approx(-3.4)

    def test_slow_descent_stops(self):
        """Below the bounce threshold the ball stays on the ground."""
        pos, vel, bounced = apply_ground_contact(Vec3(0, 0, -0.1), Vec3(1, 0, -0.5), PhysicsConfig())

        assert not bounced
        assert pos.z == 0
        assert vel.z == 0
        assert vel.x == pytest.approx(0.85)


class TestPresentation:
    """Tests for render radius and visual height."""

    def test_render_radius_grows_with_height(self):
        physics = PhysicsConfig()
        assert render_radius(0, physics) == pytest.approx(6)
        assert render_radius(10, physics) == pytest.approx(7.2)

    def test_render_radius_never_below_base(self):
        assert render_radius(-20, PhysicsConfig()) == pytest.approx(6)

    def test_visual_y_lifts_with_height(self):
        assert visual_y(100, 10, PhysicsConfig()) == pytest.approx(95)

"""Tests for the reactive goalkeeper."""

import pytest

from freekick.ai.keeper_brain import GoalkeeperController, KeeperDecision
from freekick.core.vec import Vec3


@pytest.fixture
def controller(config):
    return GoalkeeperController(config)


class TestTrigger:
    """Tests for when the keeper starts reacting."""

    def test_waits_until_ball_clears_wall(self, controller, central_scenario):
        keeper = central_scenario.keeper
        ball = central_scenario.ball
        ball.pos = Vec3(600, 330, 5)

        decision = controller.decide(keeper, ball, central_scenario)

        assert not controller.is_triggered(ball, central_scenario)
        assert decision.vx == 0.0
        assert not decision.jump

    def test_triggers_inside_margin(self, controller, central_scenario):
        ball = central_scenario.ball
        ball.pos = Vec3(600, 324, 5)

        assert controller.is_triggered(ball, central_scenario)


class TestPursuit:
    """Tests for horizontal movement."""

    def test_shuffles_toward_ball(self, controller, central_scenario):
        keeper = central_scenario.keeper
        ball = central_scenario.ball

        ball.pos = Vec3(600, 250, 5)
        assert controller.decide(keeper, ball, central_scenario).vx == 3.0

        ball.pos = Vec3(520, 250, 5)
        assert controller.decide(keeper, ball, central_scenario).vx == -3.0

    def test_holds_inside_dead_zone(self, controller, central_scenario):
        keeper = central_scenario.keeper
        ball = central_scenario.ball
        ball.pos = Vec3(565, 250, 5)

        decision = controller.decide(keeper, ball, central_scenario)

        assert decision.vx == 0.0

    def test_integrate_clamps_to_goal_mouth(self, controller, central_scenario):
        keeper = central_scenario.keeper
        keeper.x = 600.0
        controller.apply(keeper, KeeperDecision(vx=3.0))

        for _ in range(5):
            controller.integrate(keeper)

        assert keeper.x == pytest.approx(620.0 - 17.5)

        controller.apply(keeper, KeeperDecision(vx=-3.0))
        for _ in range(100):
            controller.integrate(keeper)

        assert keeper.x == pytest.approx(500.0 + 17.5)


class TestJump:
    """Tests for the single jump."""

    def test_jumps_for_high_ball_near_goal(self, controller, central_scenario):
        keeper = central_scenario.keeper
        ball = central_scenario.ball
        ball.pos = Vec3(560, 150, 20)

        decision = controller.decide(keeper, ball, central_scenario)
        controller.apply(keeper, decision)

        assert decision.jump
        assert keeper.vz == 4.0
        assert keeper.has_jumped

    def test_no_jump_for_low_ball(self, controller, central_scenario):
        keeper = central_scenario.keeper
        ball = central_scenario.ball
        ball.pos = Vec3(560, 150, 10)

        assert not controller.decide(keeper, ball, central_scenario).jump

    def test_no_jump_far_from_goal(self, controller, central_scenario):
        keeper = central_scenario.keeper
        ball = central_scenario.ball
        ball.pos = Vec3(560, 160, 30)

        assert not controller.decide(keeper, ball, central_scenario).jump

    def test_jumps_only_once(self, controller, central_scenario):
        keeper = central_scenario.keeper
        ball = central_scenario.ball
        ball.pos = Vec3(560, 150, 20)

        controller.apply(keeper, controller.decide(keeper, ball, central_scenario))
        while keeper.z > 0 or keeper.vz > 0:
            controller.integrate(keeper)

        assert keeper.z == 0.0
        assert not controller.decide(keeper, ball, central_scenario).jump

    def test_gravity_brings_keeper_down(self, controller, central_scenario):
        keeper = central_scenario.keeper
        controller.apply(keeper, KeeperDecision(jump=True))

        controller.integrate(keeper)
        assert keeper.z == pytest.approx(4.0)
        assert keeper.vz == pytest.approx(3.8)

        for _ in range(200):
            controller.integrate(keeper)

        assert keeper.z == 0.0
        assert keeper.vz == 0.0

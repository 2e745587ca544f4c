"""Tests for core types: vectors, clock, events, phases, entities."""

import math

import pytest

from freekick.core.clock import Clock
from freekick.core.entities import (
    Ball,
    ShotParameters,
    WallPlayer,
    Wind,
    contact_to_spin,
    normalize_degrees,
)
from freekick.core.events import EventBus, EventType
from freekick.core.phases import AttemptPhase, InvalidPhaseTransition, PhaseStateMachine
from freekick.core.vec import Vec2, Vec3


class TestVectors:
    """Tests for Vec2 and Vec3."""

    def test_vec2_arithmetic(self):
        assert Vec2(1, 2) + Vec2(3, 4) == Vec2(4, 6)
        assert Vec2(3, 4) - Vec2(1, 1) == Vec2(2, 3)
        assert Vec2(1, -2) * 3 == Vec2(3, -6)
        assert Vec2(3, 4).length() == pytest.approx(5)

    def test_from_angle(self):
        v = Vec2.from_angle(math.pi / 2, 2)
        assert v.x == pytest.approx(0, abs=1e-12)
        assert v.y == pytest.approx(2)

    def test_lerp(self):
        assert Vec2(0, 0).lerp(Vec2(10, -10), 0.25) == Vec2(2.5, -2.5)

    def test_perpendicular_turns_toward_positive_angle(self):
        heading = Vec2.from_angle(0.3)
        side = heading.perpendicular()

        assert side.angle() == pytest.approx(0.3 + math.pi / 2)
        assert side.dot(heading) == pytest.approx(0.0, abs=1e-12)

    def test_vec3_ground_and_with_z(self):
        v = Vec3(1, 2, 3)
        assert v.ground == Vec2(1, 2)
        assert v.with_z(0) == Vec3(1, 2, 0)
        assert v * 2 == Vec3(2, 4, 6)


class TestClock:
    """Tests for Clock."""

    def test_tick_accumulates(self):
        clock = Clock()
        clock.tick(0.5)
        clock.tick(0.25)

        assert clock.current_time == pytest.approx(0.75)
        assert clock.tick_count == 2

    def test_negative_dt_counts_as_zero(self):
        clock = Clock()
        clock.tick(-1.0)

        assert clock.current_time == 0.0
        assert clock.tick_count == 1

    def test_time_since_mark(self):
        clock = Clock()
        clock.tick(1.0)
        clock.mark_event("resolved")
        clock.tick(0.5)

        assert clock.time_since("resolved") == pytest.approx(0.5)
        assert clock.ticks_since("resolved") == 1
        assert clock.time_since("missing") is None

    def test_clear_event(self):
        clock = Clock()
        clock.mark_event("resolved")
        clock.clear_event("resolved")

        assert clock.time_since("resolved") is None


class TestEventBus:
    """Tests for EventBus."""

    def test_subscribers_receive_matching_events(self):
        bus = EventBus()
        seen = []
        bus.subscribe(EventType.OUTCOME, seen.append)

        bus.publish(EventType.OUTCOME, tick=1, time=0.0, kind="goal")
        bus.publish(EventType.KICK, tick=2, time=0.0)

        assert [e.type for e in seen] == [EventType.OUTCOME]
        assert seen[0].data["kind"] == "goal"

    def test_subscribe_all_and_history(self):
        bus = EventBus()
        seen = []
        bus.subscribe_all(seen.append)

        bus.publish(EventType.KICK, tick=1, time=0.0)
        bus.publish(EventType.STRIKE, tick=2, time=0.0)

        assert len(seen) == 2
        assert len(bus) == 2
        assert len(bus.of_type(EventType.STRIKE)) == 1

    def test_unsubscribe(self):
        bus = EventBus()
        seen = []
        bus.subscribe(EventType.KICK, seen.append)
        bus.unsubscribe(EventType.KICK, seen.append)

        bus.publish(EventType.KICK, tick=1, time=0.0)

        assert seen == []

    def test_recording_can_be_disabled(self):
        bus = EventBus()
        bus.record = False
        bus.publish(EventType.KICK, tick=1, time=0.0)

        assert len(bus) == 0
        assert bus


class TestPhaseStateMachine:
    """Tests for attempt phase transitions."""

    def test_attempt_cycle(self):
        fsm = PhaseStateMachine()
        for phase in (AttemptPhase.APPROACH, AttemptPhase.FLIGHT, AttemptPhase.RESOLVED, AttemptPhase.AIMING):
            fsm.transition_to(phase)

        assert fsm.phase == AttemptPhase.AIMING
        assert len(fsm.history) == 4

    def test_invalid_transition_raises(self):
        fsm = PhaseStateMachine()

        with pytest.raises(InvalidPhaseTransition):
            fsm.transition_to(AttemptPhase.FLIGHT)

    def test_unvalidated_transition(self):
        fsm = PhaseStateMachine(AttemptPhase.FLIGHT)
        fsm.transition_to(AttemptPhase.AIMING, reason="reset", validate=False)

        assert fsm.is_aiming

    def test_callbacks_receive_transition(self):
        fsm = PhaseStateMachine()
        seen = []
        fsm.on_transition(seen.append)

        fsm.transition_to(AttemptPhase.APPROACH, reason="kick", tick=4, time=0.1)

        assert seen[0].from_phase == AttemptPhase.AIMING
        assert seen[0].to_phase == AttemptPhase.APPROACH
        assert seen[0].reason == "kick"

    def test_game_over_is_terminal(self):
        fsm = PhaseStateMachine(AttemptPhase.RESOLVED)
        fsm.transition_to(AttemptPhase.GAME_OVER)

        assert fsm.is_terminal
        assert not fsm.ball_is_live
        assert fsm.can_transition_to(AttemptPhase.AIMING)


class TestEntities:
    """Tests for entity helpers."""

    def test_shot_clamping(self):
        shot = ShotParameters(direction_offset=190, power=500, curve=-9, dip=7).clamped(20, 100, 5)

        assert shot.direction_offset == pytest.approx(-170)
        assert shot.power == 100
        assert shot.curve == -5
        assert shot.dip == 5

    def test_normalize_degrees(self):
        assert normalize_degrees(180) == pytest.approx(-180)
        assert normalize_degrees(-190) == pytest.approx(170)
        assert normalize_degrees(45) == pytest.approx(45)

    def test_contact_to_spin(self):
        assert contact_to_spin(0.5, 0.5) == (0.0, 0.0)
        assert contact_to_spin(0.0, 1.0) == (5.0, -5.0)
        assert contact_to_spin(2.0, -1.0) == (-5.0, 5.0)

    def test_wall_box_is_open(self):
        player = WallPlayer(0, 0, 20, 50)

        assert player.contains(10, 25)
        assert not player.contains(0, 25)
        assert not player.contains(10, 50)

    def test_ball_distance_travelled(self):
        ball = Ball.at_rest(100, 100)
        ball.pos = Vec3(103, 96, 8)

        assert ball.distance_travelled() == pytest.approx(5)
        assert not ball.is_grounded

    def test_wind_angle(self):
        assert Wind(0.0, 0.02).angle_degrees == pytest.approx(90)

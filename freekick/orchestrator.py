"""Orchestrator - Frame loop and attempt lifecycle for the free-kick engine.

The orchestrator owns every piece of mutable state (ball, wall, keeper,
wind, scoreboard) and changes it only inside ``advance``. The shell feeds
commands, calls ``advance`` once per display frame, draws from
``snapshot`` and listens on the event bus.

Attempt Lifecycle:
    1. Aiming - power meter sweeps, aim may change, preview is live
    2. Approach - run-up animation; aim was frozen by the kick
    3. Flight - kinematics, keeper and resolver every frame
    4. Resolved - outcome fixed; ball and keeper play out the settle delay
    5. Next attempt (fresh scenario), or game over when lives run out

Usage:
    sim = FreeKickSimulation()
    sim.event_bus.subscribe(EventType.OUTCOME, show_message)

    sim.set_aim(direction_offset=-4, power=80, curve=2.5)
    sim.kick()
    while running:
        sim.advance(dt)
        draw(sim.snapshot())
"""

from __future__ import annotations

import logging
import random
from collections import deque
from typing import Callable, Deque, Optional, Tuple

from .ai.keeper_brain import GoalkeeperController
from .config import FreeKickConfig
from .core.clock import Clock
from .core.entities import Scenario, ShotParameters
from .core.events import EventBus, EventType
from .core.phases import AttemptPhase, PhaseStateMachine, PhaseTransition
from .core.vec import Vec2
from .export import BallFrame, FrameSnapshot, KeeperFrame, WallFrame
from .game_state import AttemptHistory, AttemptRecord, SessionState
from .physics.kinematics import (
    FlightEnvironment,
    apply_ground_contact,
    integrate_step,
    launch_velocity,
    render_radius,
    visual_y,
)
from .resolution.outcome import AttemptOutcome, OutcomeResolver, ShotResolution
from .systems.power_meter import PowerMeter
from .systems.predictor import TrajectoryPredictor
from .systems.scenario import ScenarioGenerator

logger = logging.getLogger(__name__)


# Run-up path of the kicker, relative to the ball spot
RUNUP_START_OFFSET = Vec2(-30.0, 30.0)
RUNUP_END_OFFSET = Vec2(-20.0, -10.0)
RUNUP_COMPLETE = 100.0

RESOLVED_MARK = "resolved"


class FreeKickSimulation:
    """Simulation context for a free-kick session.

    Args:
        config: Tuning configuration (defaults if omitted)
        event_bus: Bus to emit on (a private one if omitted)
        rng: Random source for scenarios (seed it for reproducible sessions)
        keeper_controller: Keeper behaviour (the reactive controller if omitted)
    """

    def __init__(
        self,
        config: Optional[FreeKickConfig] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        keeper_controller: Optional[GoalkeeperController] = None,
    ):
        self.config = config or FreeKickConfig()
        self.clock = Clock()
        self.event_bus = event_bus or EventBus()
        self.rng = rng or random.Random()

        # Systems
        self.generator = ScenarioGenerator(self.config, self.rng)
        self.predictor = TrajectoryPredictor(self.config)
        self.resolver = OutcomeResolver(self.config)
        self.keeper_brain = keeper_controller or GoalkeeperController(self.config)
        self.power_meter = PowerMeter(self.config.shot)

        # Phase state machine
        self.phases = PhaseStateMachine(AttemptPhase.AIMING)
        self.phases.on_transition(self._on_phase_change)

        # Session
        self.session = SessionState.new(self.config.session.lives)
        self.history = AttemptHistory()

        # Aim (power lives in the meter)
        self._direction_offset: float = 0.0
        self._curve: float = 0.0
        self._dip: float = 0.0

        # Attempt state
        self.trail: Deque[Tuple[float, float]] = deque(maxlen=self.config.session.trail_length)
        self._shot: Optional[ShotParameters] = None
        self._flight_env: Optional[FlightEnvironment] = None
        self._runup_progress: float = 0.0
        self._flight_frames: int = 0
        self.attempt_number: int = 1

        self.scenario: Scenario = self.generator.generate()
        self._emit(EventType.SCENARIO_READY, "First attempt ready", **self._scenario_data())

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def phase(self) -> AttemptPhase:
        return self.phases.phase

    @property
    def aim(self) -> ShotParameters:
        """Current aim, as a kick taken now would use it."""
        shot = self.config.shot
        return ShotParameters(
            direction_offset=self._direction_offset,
            power=self.power_meter.value,
            curve=self._curve,
            dip=self._dip,
        ).clamped(shot.power_min, shot.power_max, shot.spin_limit)

    @property
    def shot(self) -> Optional[ShotParameters]:
        """Aim frozen at kick time for the attempt in progress."""
        return self._shot

    @property
    def resolution(self) -> Optional[ShotResolution]:
        return self.resolver.resolution

    @property
    def outcome(self) -> Optional[AttemptOutcome]:
        resolution = self.resolver.resolution
        return resolution.outcome if resolution else None

    @property
    def flight_frames(self) -> int:
        return self._flight_frames

    # =========================================================================
    # Commands
    # =========================================================================

    def set_aim(
        self,
        direction_offset: Optional[float] = None,
        power: Optional[float] = None,
        curve: Optional[float] = None,
        dip: Optional[float] = None,
    ) -> ShotParameters:
        """Update any subset of the aim. Values are clamped, never rejected.

        Changes never reach a shot already struck; they apply to the next
        kick.

        Returns:
            The resulting (clamped) aim
        """
        if direction_offset is not None:
            self._direction_offset = direction_offset
        if power is not None:
            self.power_meter.set(power)
        if curve is not None:
            self._curve = curve
        if dip is not None:
            self._dip = dip

        aim = self.aim
        self._direction_offset = aim.direction_offset
        self._curve = aim.curve
        self._dip = aim.dip
        return aim

    def kick(self) -> bool:
        """Start the run-up with the current aim.

        Returns:
            True if the kick was taken, False if not aiming
        """
        if not self.phases.is_aiming:
            return False

        shot = self.aim
        ball = self.scenario.ball

        self._shot = shot
        self._flight_env = FlightEnvironment.for_shot(self.config.physics, self.scenario.wind, shot)
        ball.target_velocity = launch_velocity(self.scenario.base_angle, shot, self.config.shot)
        self._runup_progress = 0.0

        self._transition(AttemptPhase.APPROACH, "kick")
        self._emit(
            EventType.KICK,
            f"Kick: offset={shot.direction_offset:.1f} power={shot.power:.0f} "
            f"curve={shot.curve:.1f} dip={shot.dip:.1f}",
            direction_offset=shot.direction_offset,
            power=shot.power,
            curve=shot.curve,
            dip=shot.dip,
        )
        logger.debug("Kick accepted: %s", shot)
        return True

    def reset(self) -> None:
        """Start a new session from any phase.

        Score and lives are reinitialised and any outcome in progress is
        discarded without touching the scoreboard.
        """
        self.session.reset()
        self.history.clear()
        self.power_meter.reset()
        self.attempt_number = 1
        self._transition(AttemptPhase.AIMING, "session reset", validate=False)
        self._begin_attempt(self.generator.generate())

        self._emit(EventType.SESSION_RESET, "Session reset")
        self._emit(EventType.SCORE_CHANGED, "Score reset", score=self.session.score)
        self._emit(EventType.LIVES_CHANGED, "Lives reset", lives=self.session.lives)
        logger.info("Session reset")

    def load_scenario(self, scenario: Scenario) -> None:
        """Replace the scenario of the attempt being aimed.

        Raises:
            RuntimeError: If a shot is already under way
        """
        if not self.phases.is_aiming:
            raise RuntimeError(
                f"Scenarios can only be loaded while aiming (phase is {self.phase.value})"
            )
        self._begin_attempt(scenario)

    # =========================================================================
    # Frame Loop
    # =========================================================================

    def advance(self, dt: Optional[float] = None) -> AttemptPhase:
        """Advance the simulation by one frame.

        Args:
            dt: Seconds since the previous frame (the configured frame time
                if omitted). Only the settle delay depends on it; physics
                advances one step per call.

        Returns:
            The phase after this frame
        """
        if dt is None:
            dt = self.config.session.frame_dt
        self.clock.tick(dt)

        phase = self.phase
        if phase == AttemptPhase.AIMING:
            self.power_meter.tick()
        elif phase == AttemptPhase.APPROACH:
            self._update_approach()
        elif self.phases.ball_is_live:
            self._update_flight()
            if phase == AttemptPhase.RESOLVED:
                self._update_settle()

        return self.phase

    def run_attempt(
        self,
        shot: ShotParameters,
        max_frames: int = 5000,
        on_frame: Optional[Callable[[FrameSnapshot], None]] = None,
    ) -> Optional[AttemptOutcome]:
        """Aim, kick and advance until the attempt has settled.

        Args:
            shot: Aim for the kick
            max_frames: Frame budget for the whole attempt
            on_frame: Receives a snapshot after every frame

        Returns:
            The settled outcome, or None if no kick could be taken or the
            frame budget ran out first
        """
        if self.phases.is_terminal:
            return None
        self.set_aim(shot.direction_offset, shot.power, shot.curve, shot.dip)
        taken = self.session.attempts_taken
        if not self.kick():
            return None

        for _ in range(max_frames):
            self.advance()
            if on_frame is not None:
                on_frame(self.snapshot())
            if self.session.attempts_taken > taken:
                return self.history.attempts[-1].outcome
        return None

    def _update_approach(self) -> None:
        self._runup_progress += self.config.shot.runup_step
        if self._runup_progress < RUNUP_COMPLETE:
            return

        self._runup_progress = RUNUP_COMPLETE
        ball = self.scenario.ball
        ball.velocity = ball.target_velocity
        ball.pos = ball.pos.with_z(0.0)
        ball.prev_pos = ball.pos
        self._flight_frames = 0

        self._transition(AttemptPhase.FLIGHT, "run-up complete")
        self._emit(EventType.STRIKE, "Ball struck", velocity=ball.velocity)

    def _update_flight(self) -> None:
        ball = self.scenario.ball
        keeper = self.scenario.keeper
        physics = self.config.physics

        ball.prev_pos = ball.pos
        ball.pos, ball.velocity = integrate_step(ball.pos, ball.velocity, self._flight_env)
        self._flight_frames += 1

        ball.pos, ball.velocity, bounced = apply_ground_contact(ball.pos, ball.velocity, physics)
        ball.render_radius = render_radius(ball.pos.z, physics)
        self.trail.append((ball.pos.x, visual_y(ball.pos.y, ball.pos.z, physics)))
        if bounced:
            self._emit(EventType.BALL_BOUNCE, "Ball bounced", x=ball.pos.x, y=ball.pos.y)

        if not self.resolver.resolved:
            decision = self.keeper_brain.decide(keeper, ball, self.scenario)
            self.keeper_brain.apply(keeper, decision)
            if decision.jump:
                self._emit(EventType.KEEPER_JUMP, "Keeper jumps", x=keeper.x)
        self.keeper_brain.integrate(keeper)

        if self.resolver.resolved:
            return

        resolution = self.resolver.check(ball, self.scenario, self._flight_frames)
        if resolution is not None:
            self._on_resolved(resolution)

    def _on_resolved(self, resolution: ShotResolution) -> None:
        self.scenario.keeper.vx = 0.0
        self.clock.mark_event(RESOLVED_MARK)
        self._transition(AttemptPhase.RESOLVED, resolution.outcome.value)
        self._emit(
            EventType.OUTCOME,
            resolution.outcome.message,
            kind=resolution.outcome.value,
            message=resolution.outcome.message,
            flight_frame=resolution.flight_frame,
            settle_delay=resolution.settle_delay,
        )
        logger.info("Attempt resolved: %s", resolution.format_description())

    def _update_settle(self) -> None:
        resolution = self.resolver.resolution
        elapsed = self.clock.time_since(RESOLVED_MARK)
        if resolution is None or elapsed is None or elapsed < resolution.settle_delay:
            return

        logger.debug("Settled after %d frames", self.clock.ticks_since(RESOLVED_MARK))
        outcome = resolution.outcome
        self.session.apply(outcome)
        self.history.record(AttemptRecord(
            number=self.session.attempts_taken,
            outcome=outcome,
            shot=self._shot or self.aim,
            flight_frames=resolution.flight_frame,
            distance=self.scenario.ball.start.distance_to(resolution.position.ground),
        ))

        if outcome.is_goal:
            self._emit(EventType.SCORE_CHANGED, f"Score {self.session.score}", score=self.session.score)
        else:
            self._emit(EventType.LIVES_CHANGED, f"Lives {self.session.lives}", lives=self.session.lives)

        if self.session.is_over:
            self._transition(AttemptPhase.GAME_OVER, "no lives left")
            self._emit(
                EventType.GAME_OVER,
                f"GAME OVER! Final Score: {self.session.score}",
                final_score=self.session.score,
            )
            logger.info("Game over, final score %d", self.session.score)
            return

        self._transition(AttemptPhase.AIMING, "next attempt")
        self.attempt_number += 1
        self._begin_attempt(self.generator.generate())

    def _begin_attempt(self, scenario: Scenario) -> None:
        self.scenario = scenario
        self.resolver.reset()
        self.trail.clear()
        self.clock.clear_event(RESOLVED_MARK)
        self._shot = None
        self._flight_env = None
        self._runup_progress = 0.0
        self._flight_frames = 0
        self._emit(EventType.SCENARIO_READY, "Scenario ready", **self._scenario_data())

    # =========================================================================
    # Snapshot
    # =========================================================================

    def kicker_position(self) -> Tuple[float, float]:
        """Where the run-up actor stands this frame."""
        start = self.scenario.ball.start
        begin = start + RUNUP_START_OFFSET
        end = start + RUNUP_END_OFFSET

        if self.phase == AttemptPhase.AIMING:
            pos = begin
        elif self.phase == AttemptPhase.APPROACH:
            pos = begin.lerp(end, self._runup_progress / RUNUP_COMPLETE)
        else:
            pos = end
        return (pos.x, pos.y)

    def snapshot(self) -> FrameSnapshot:
        """Read-only view of the current frame for rendering."""
        scenario = self.scenario
        ball = scenario.ball
        keeper = scenario.keeper
        physics = self.config.physics

        predicted: Tuple = ()
        if self.phases.is_aiming:
            predicted = tuple(self.predictor.predict(ball.pos, scenario.base_angle, self.aim, scenario.wind))

        outcome = self.outcome
        return FrameSnapshot(
            tick=self.clock.tick_count,
            time=self.clock.current_time,
            phase=self.phase.value,
            ball=BallFrame(
                x=ball.pos.x,
                y=ball.pos.y,
                z=ball.pos.z,
                render_radius=ball.render_radius,
                visual_y=visual_y(ball.pos.y, ball.pos.z, physics),
            ),
            keeper=KeeperFrame(keeper.x, keeper.y, keeper.z, keeper.width, keeper.height),
            wall=tuple(WallFrame(p.x, p.y, p.width, p.height) for p in scenario.wall),
            trail=tuple(self.trail),
            wind=(scenario.wind.x, scenario.wind.y),
            wind_angle=scenario.wind.angle_degrees,
            predicted=predicted,
            score=self.session.score,
            lives=self.session.lives,
            power=self.power_meter.value,
            kicker=self.kicker_position(),
            outcome=outcome.value if outcome else None,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _transition(self, target: AttemptPhase, reason: str, validate: bool = True) -> None:
        self.phases.transition_to(
            target,
            reason=reason,
            tick=self.clock.tick_count,
            time=self.clock.current_time,
            validate=validate,
        )

    def _on_phase_change(self, transition: PhaseTransition) -> None:
        self._emit(
            EventType.PHASE_CHANGE,
            f"{transition.from_phase.value} -> {transition.to_phase.value} ({transition.reason})",
            from_phase=transition.from_phase.value,
            to_phase=transition.to_phase.value,
        )
        logger.debug("Phase %s -> %s: %s", transition.from_phase.value, transition.to_phase.value, transition.reason)

    def _emit(self, event_type: EventType, description: str = "", **data) -> None:
        self.event_bus.publish(
            event_type,
            tick=self.clock.tick_count,
            time=self.clock.current_time,
            description=description,
            attempt=self.attempt_number,
            **data,
        )

    def _scenario_data(self) -> dict:
        scenario = self.scenario
        return {
            "ball_x": scenario.ball.pos.x,
            "ball_y": scenario.ball.pos.y,
            "wall_size": len(scenario.wall),
            "wind_x": scenario.wind.x,
            "wind_y": scenario.wind.y,
            "wind_angle": scenario.wind.angle_degrees,
        }

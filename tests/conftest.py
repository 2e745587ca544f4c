"""Shared pytest fixtures for free-kick tests."""

import random

import pytest

from freekick.ai.keeper_brain import GoalkeeperController, KeeperDecision
from freekick.config import FreeKickConfig, PitchConfig, ShotConfig
from freekick.core.entities import Wind
from freekick.core.events import EventBus
from freekick.orchestrator import FreeKickSimulation
from freekick.systems.scenario import ScenarioGenerator


class StandStillKeeper(GoalkeeperController):
    """Keeper that never moves off its spot."""

    def decide(self, keeper, ball, scenario):
        return KeeperDecision.hold("scripted")


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config() -> FreeKickConfig:
    """Default tuning."""
    return FreeKickConfig()


@pytest.fixture
def calm_config() -> FreeKickConfig:
    """No wind and the power meter switched off."""
    return FreeKickConfig(
        pitch=PitchConfig(wind_limit=0.0),
        shot=ShotConfig(power_meter_speed=0.0),
    )


@pytest.fixture
def generator(config) -> ScenarioGenerator:
    """Seeded scenario generator."""
    return ScenarioGenerator(config, rng=random.Random(7))


@pytest.fixture
def central_scenario(generator):
    """Ball straight in front of the goal centre, 260 units out, no wall, calm."""
    return generator.build(ball_x=560.0, ball_y=400.0, wall_size=0, wind=Wind())


# =============================================================================
# Simulation Fixtures
# =============================================================================


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def sim(config, bus) -> FreeKickSimulation:
    """Seeded simulation with the reactive keeper."""
    return FreeKickSimulation(config=config, event_bus=bus, rng=random.Random(11))


@pytest.fixture
def scripted_sim(config, bus) -> FreeKickSimulation:
    """Seeded simulation whose keeper never moves, on the central set piece."""
    sim = FreeKickSimulation(
        config=config,
        event_bus=bus,
        rng=random.Random(11),
        keeper_controller=StandStillKeeper(config),
    )
    sim.load_scenario(sim.generator.build(560.0, 400.0, 0, Wind()))
    return sim

"""Entry point for the freekick package: a headless demo session."""

import argparse
import logging
import random
import sys

from pydantic import ValidationError
from rich.console import Console

from freekick.config import FreeKickConfig, load_config
from freekick.core.entities import ShotParameters
from freekick.core.events import EventType
from freekick.export import FrameRecorder
from freekick.logging import AttemptLog
from freekick.orchestrator import FreeKickSimulation


def pick_shot(rng: random.Random, config: FreeKickConfig) -> ShotParameters:
    """A striker who aims roughly at goal with some spin."""
    shot = config.shot
    return ShotParameters(
        direction_offset=rng.uniform(-8.0, 8.0),
        power=rng.uniform((shot.power_min + shot.power_max) / 2, shot.power_max),
        curve=rng.uniform(-shot.spin_limit, shot.spin_limit) / 2,
        dip=rng.uniform(-shot.spin_limit, shot.spin_limit) / 2,
    )


def main() -> None:
    """Run free kicks until the lives run out (or the attempt limit is hit)."""
    parser = argparse.ArgumentParser(
        description="Free-kick simulator (headless demo)",
        prog="freekick",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for scenarios and the demo striker",
    )
    parser.add_argument(
        "--attempts",
        type=int,
        default=50,
        help="Stop after this many attempts (default: 50)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON file with tuning overrides",
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        help="Write recorded frames to this JSON file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine decisions",
    )

    args = parser.parse_args()
    console = Console()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = load_config(args.config) if args.config else FreeKickConfig()
    except (OSError, ValidationError) as exc:
        console.print(f"[bold red]Invalid configuration:[/] {exc}")
        sys.exit(2)

    # Separate streams for the set pieces and the demo striker
    rng = random.Random(None if args.seed is None else args.seed + 1)
    sim = FreeKickSimulation(config=config, rng=random.Random(args.seed))
    log = AttemptLog()
    log.attach(sim.event_bus)

    def show_outcome(event):
        # Global handlers run in order, so the log already holds this entry
        if event.type == EventType.OUTCOME:
            console.print(log.entries[-1].format_rich())

    sim.event_bus.subscribe_all(show_outcome)

    recorder = FrameRecorder(every=2) if args.export else None

    console.print("[bold]Free-kick simulator (demo mode)[/]")
    console.print("=" * 50)

    for _ in range(args.attempts):
        if sim.session.is_over:
            break
        sim.run_attempt(pick_shot(rng, config), on_frame=recorder.record if recorder else None)

    console.print()
    console.print(log.summary_table())
    console.print(f"Final score: [bold]{sim.session.score}[/]  Lives left: {sim.session.lives}")
    counts = ", ".join(f"{o.value}={n}" for o, n in sim.history.outcome_counts().items() if n)
    console.print(f"Conversion: {sim.history.conversion_rate():.0%}  ({counts or 'no attempts'})")

    if recorder:
        path = recorder.save(args.export)
        console.print(f"Frames written to {path}")


if __name__ == "__main__":
    main()

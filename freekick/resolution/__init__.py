"""Resolution layer - collisions and attempt outcomes."""

from .outcome import AttemptOutcome, OutcomeResolver, ShotResolution

__all__ = [
    "AttemptOutcome",
    "OutcomeResolver",
    "ShotResolution",
]

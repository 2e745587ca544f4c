"""Attempt logging and output."""

from freekick.logging.attempt_log import AttemptLog, AttemptLogEntry

__all__ = ["AttemptLog", "AttemptLogEntry"]

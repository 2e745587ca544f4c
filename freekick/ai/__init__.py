"""AI layer - reactive defender behaviour."""

from .keeper_brain import GoalkeeperController, KeeperDecision

__all__ = [
    "GoalkeeperController",
    "KeeperDecision",
]

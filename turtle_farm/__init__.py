"""
Turtle tree farm - navigation and task engine for a single farming turtle
"""

from .errors import (
    FarmHaltError,
    InsufficientResourcesError,
    PlacementError,
    RefuelError,
    TurtleStuckError,
)
from .farm import FarmOrchestrator
from .pose import Heading, MoveKind, Pose, PoseTracker

__all__ = [
    "FarmOrchestrator",
    "FarmHaltError",
    "Heading",
    "InsufficientResourcesError",
    "MoveKind",
    "PlacementError",
    "Pose",
    "PoseTracker",
    "RefuelError",
    "TurtleStuckError",
]

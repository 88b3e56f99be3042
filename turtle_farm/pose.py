"""
Pose tracking - the turtle's believed position and heading

The origin is the cell and facing the turtle starts in. Only successful
moves change the belief.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from .schemas import MoveOutcome


class Heading(Enum):
    """Cardinal headings, ordered clockwise"""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def right(self) -> "Heading":
        return Heading((self.value + 1) % 4)

    def left(self) -> "Heading":
        return Heading((self.value - 1) % 4)

    @property
    def forward_delta(self) -> Tuple[int, int]:
        """(dx, dz) of one step forward"""
        return _FORWARD_DELTAS[self]


_FORWARD_DELTAS = {
    Heading.NORTH: (0, -1),
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, 1),
    Heading.WEST: (-1, 0),
}


class MoveKind(Enum):
    """Primitive moves that change the pose"""

    FORWARD = "forward"
    BACK = "back"
    UP = "up"
    DOWN = "down"
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"


@dataclass(frozen=True)
class Pose:
    """Relative position and heading"""

    x: int = 0
    y: int = 0
    z: int = 0
    heading: Heading = Heading.NORTH

    @property
    def position(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)


def apply_move(pose: Pose, kind: MoveKind) -> Pose:
    """Pose after one successful move of the given kind"""
    if kind is MoveKind.FORWARD or kind is MoveKind.BACK:
        dx, dz = pose.heading.forward_delta
        sign = 1 if kind is MoveKind.FORWARD else -1
        return replace(pose, x=pose.x + sign * dx, z=pose.z + sign * dz)
    elif kind is MoveKind.UP:
        return replace(pose, y=pose.y + 1)
    elif kind is MoveKind.DOWN:
        return replace(pose, y=pose.y - 1)
    elif kind is MoveKind.TURN_LEFT:
        return replace(pose, heading=pose.heading.left())
    elif kind is MoveKind.TURN_RIGHT:
        return replace(pose, heading=pose.heading.right())
    raise ValueError(f"Unknown move kind: {kind!r}")


class PoseTracker:
    """Owns the single pose belief of one turtle"""

    def __init__(self, pose: Optional[Pose] = None):
        self._pose = pose or Pose()

    @property
    def pose(self) -> Pose:
        return self._pose

    def apply_move(self, kind: MoveKind, outcome: MoveOutcome) -> Pose:
        """Record a primitive result; failed moves leave the pose untouched"""
        if not isinstance(kind, MoveKind):
            raise ValueError(f"Unknown move kind: {kind!r}")
        if outcome.success:
            self._pose = apply_move(self._pose, kind)
        return self._pose

    def snapshot(self) -> Pose:
        # Pose is immutable, so the current value is already a safe copy
        return self._pose

    def reset(self, pose: Optional[Pose] = None) -> None:
        self._pose = pose or Pose()

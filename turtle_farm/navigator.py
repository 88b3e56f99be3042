"""
Navigator - axis-sequenced dead reckoning to relative coordinates
"""

from .logging_config import get_logger
from .movement import GuardedMover
from .pose import Heading, Pose, PoseTracker

logger = get_logger(__name__)


class Navigator:
    """Moves the turtle to relative targets: vertical first, then X, then Z"""

    def __init__(self, mover: GuardedMover, tracker: PoseTracker):
        self.mover = mover
        self.tracker = tracker

    @property
    def pose(self) -> Pose:
        return self.tracker.pose

    def face(self, heading: Heading) -> None:
        """Turn in place to the given heading using the fewest turns"""
        turns_right = (heading.value - self.pose.heading.value) % 4
        if turns_right == 3:
            self.mover.turn_left()
            return
        for _ in range(turns_right):
            self.mover.turn_right()

    def move_to(self, x: int, y: int, z: int) -> None:
        """Move to (x, y, z); a no-op when already there"""
        start = self.pose
        if start.position == (x, y, z):
            return
        logger.debug(
            "Moving to relative position",
            target=(x, y, z),
            current=start.position,
            heading=start.heading.name,
        )

        while self.pose.y < y:
            self.mover.up()
        while self.pose.y > y:
            self.mover.down()

        if x != self.pose.x:
            self.face(Heading.EAST if x > self.pose.x else Heading.WEST)
            while self.pose.x != x:
                self.mover.forward()

        if z != self.pose.z:
            self.face(Heading.SOUTH if z > self.pose.z else Heading.NORTH)
            while self.pose.z != z:
                self.mover.forward()

        logger.debug("Reached relative position", position=self.pose.position)

    def return_to(self, pose: Pose) -> None:
        """Restore a previously saved pose, position and heading"""
        self.move_to(pose.x, pose.y, pose.z)
        self.face(pose.heading)

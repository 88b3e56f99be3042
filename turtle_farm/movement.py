"""
Guarded moves - single-step movement with one dig-and-retry recovery
"""

from typing import Callable, Dict, Optional, Tuple

from .errors import TurtleStuckError
from .logging_config import get_logger
from .pose import MoveKind, PoseTracker
from .schemas import MoveOutcome
from .turtle_api import TurtleAPI

logger = get_logger(__name__)

Primitive = Callable[[], MoveOutcome]


class GuardedMover:
    """Runs move primitives and keeps the pose tracker in step with them"""

    def __init__(self, turtle: TurtleAPI, tracker: PoseTracker):
        self.turtle = turtle
        self.tracker = tracker
        self._bindings: Dict[MoveKind, Tuple[Primitive, Optional[Primitive]]] = {
            MoveKind.FORWARD: (turtle.forward, turtle.dig),
            MoveKind.BACK: (turtle.back, turtle.dig),
            MoveKind.UP: (turtle.up, turtle.dig_up),
            MoveKind.DOWN: (turtle.down, turtle.dig_down),
            # Turns are never blocked by blocks, so there is nothing to dig
            MoveKind.TURN_LEFT: (turtle.turn_left, None),
            MoveKind.TURN_RIGHT: (turtle.turn_right, None),
        }

    def move(self, kind: MoveKind) -> MoveOutcome:
        """Perform one move, digging and retrying once if blocked

        Raises:
            TurtleStuckError: the move could not be completed
        """
        try:
            primitive, dig = self._bindings[kind]
        except KeyError:
            raise ValueError(f"Unknown move kind: {kind!r}") from None

        outcome = MoveOutcome.from_result(primitive())
        self.tracker.apply_move(kind, outcome)
        if outcome.success:
            return outcome
        return self._recover(kind, outcome, primitive, dig)

    def _recover(
        self, kind: MoveKind, failure: MoveOutcome, primitive: Primitive, dig: Optional[Primitive]
    ) -> MoveOutcome:
        if dig is None:
            logger.error("Move failed and cannot be dug clear", move=kind.value, reason=failure.reason)
            raise TurtleStuckError(kind, failure.reason)

        logger.warning("Blocked, attempting to dig", move=kind.value, reason=failure.reason)
        dug = MoveOutcome.from_result(dig())
        if not dug.success:
            logger.error("Failed to dig, cannot proceed", move=kind.value, reason=dug.reason)
            raise TurtleStuckError(kind, failure.reason, dig_reason=dug.reason)

        logger.info("Dug successfully, retrying move", move=kind.value)
        retry = MoveOutcome.from_result(primitive())
        self.tracker.apply_move(kind, retry)
        if not retry.success:
            logger.error("Still blocked after digging", move=kind.value, reason=retry.reason)
            raise TurtleStuckError(kind, retry.reason)
        return retry

    def forward(self) -> MoveOutcome:
        return self.move(MoveKind.FORWARD)

    def back(self) -> MoveOutcome:
        return self.move(MoveKind.BACK)

    def up(self) -> MoveOutcome:
        return self.move(MoveKind.UP)

    def down(self) -> MoveOutcome:
        return self.move(MoveKind.DOWN)

    def turn_left(self) -> MoveOutcome:
        return self.move(MoveKind.TURN_LEFT)

    def turn_right(self) -> MoveOutcome:
        return self.move(MoveKind.TURN_RIGHT)

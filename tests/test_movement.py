"""Tests for guarded moves."""
import pytest

from turtle_farm.errors import TurtleStuckError
from turtle_farm.movement import GuardedMover
from turtle_farm.pose import Heading, MoveKind, Pose, PoseTracker
from turtle_farm.schemas import MoveOutcome

from mocks import BLOCKED, NOTHING_TO_DIG, ScriptedTurtle


@pytest.fixture
def turtle():
    return ScriptedTurtle()


@pytest.fixture
def tracker():
    return PoseTracker()


class RecordingTracker(PoseTracker):
    """PoseTracker that remembers every reported outcome"""

    def __init__(self):
        super().__init__()
        self.reports = []

    def apply_move(self, kind, outcome):
        self.reports.append((kind, outcome.success))
        return super().apply_move(kind, outcome)


@pytest.fixture
def mover(turtle, tracker):
    return GuardedMover(turtle, tracker)


class TestGuardedMove:
    """Test the single dig-and-retry recovery."""

    def test_should_move_without_digging_when_clear(self, turtle, tracker, mover):
        outcome = mover.forward()

        assert outcome.success
        assert turtle.calls == ["forward"]
        assert tracker.pose == Pose(0, 0, -1, Heading.NORTH)

    def test_should_dig_once_and_retry_once(self, turtle, tracker, mover):
        # Arrange
        turtle.script("forward", BLOCKED, MoveOutcome.ok())

        # Act
        outcome = mover.forward()

        # Assert
        assert outcome.success
        assert turtle.calls == ["forward", "dig", "forward"]
        assert tracker.pose.z == -1

    def test_should_report_every_attempt_to_tracker(self, turtle):
        # Arrange
        tracker = RecordingTracker()
        mover = GuardedMover(turtle, tracker)
        turtle.script("forward", BLOCKED, MoveOutcome.ok())

        # Act
        mover.forward()

        # Assert
        assert tracker.reports == [(MoveKind.FORWARD, False), (MoveKind.FORWARD, True)]
        assert tracker.pose.z == -1

    def test_should_report_failed_attempts_before_halting(self, turtle):
        tracker = RecordingTracker()
        mover = GuardedMover(turtle, tracker)
        turtle.script("up", BLOCKED).script("dig_up", NOTHING_TO_DIG)

        with pytest.raises(TurtleStuckError):
            mover.up()

        assert tracker.reports == [(MoveKind.UP, False)]
        assert tracker.pose == Pose()

    def test_should_halt_when_retry_still_blocked(self, turtle, tracker, mover):
        turtle.script("forward", BLOCKED, BLOCKED)

        with pytest.raises(TurtleStuckError) as exc_info:
            mover.forward()

        assert turtle.calls == ["forward", "dig", "forward"]
        assert exc_info.value.kind is MoveKind.FORWARD
        assert tracker.pose == Pose()

    def test_should_halt_when_dig_fails(self, turtle, tracker, mover):
        turtle.script("up", BLOCKED).script("dig_up", MoveOutcome.failed("Cannot break unbreakable block"))

        with pytest.raises(TurtleStuckError) as exc_info:
            mover.up()

        assert turtle.calls == ["up", "dig_up"]
        assert exc_info.value.dig_reason == "Cannot break unbreakable block"
        assert "unbreakable" in str(exc_info.value)
        assert tracker.pose == Pose()

    def test_turn_failure_is_fatal_without_digging(self, turtle, tracker, mover):
        turtle.script("turn_left", MoveOutcome.failed("Turn failed"))

        with pytest.raises(TurtleStuckError):
            mover.turn_left()

        assert turtle.calls == ["turn_left"]
        assert tracker.pose.heading is Heading.NORTH

    @pytest.mark.parametrize(
        "kind, primitive, dig",
        [
            (MoveKind.FORWARD, "forward", "dig"),
            (MoveKind.BACK, "back", "dig"),
            (MoveKind.UP, "up", "dig_up"),
            (MoveKind.DOWN, "down", "dig_down"),
        ],
    )
    def test_dig_bindings(self, turtle, mover, kind, primitive, dig):
        turtle.script(primitive, BLOCKED)

        mover.move(kind)

        assert turtle.calls == [primitive, dig, primitive]

    def test_accepts_raw_tuple_results(self, turtle, tracker, mover):
        """Surfaces that return (success, reason) tuples are adapted."""
        turtle.script("down", (False, "Movement obstructed"), (True, None))

        outcome = mover.down()

        assert outcome == MoveOutcome.ok()
        assert turtle.calls == ["down", "dig_down", "down"]
        assert tracker.pose.y == -1

    def test_nothing_to_dig_is_fatal(self, turtle, mover):
        turtle.script("back", BLOCKED).script("dig", NOTHING_TO_DIG)

        with pytest.raises(TurtleStuckError):
            mover.back()

    def test_unknown_kind_is_rejected(self, mover):
        with pytest.raises(ValueError):
            mover.move("sideways")

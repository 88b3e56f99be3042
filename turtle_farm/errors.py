"""
Fatal error hierarchy - anything raised from here halts the farm run
"""

from typing import Optional


class FarmHaltError(Exception):
    """Base class for failures that must stop the turtle"""
    pass


class TurtleStuckError(FarmHaltError):
    """Raised when a move stays blocked after the dig-and-retry recovery"""

    def __init__(self, kind, reason: Optional[str], dig_reason: Optional[str] = None):
        self.kind = kind
        self.reason = reason
        self.dig_reason = dig_reason
        message = f"Turtle stuck on {kind.value}: {reason or 'Unknown reason'}"
        if dig_reason:
            message += f" (dig failed: {dig_reason})"
        super().__init__(message)


class InsufficientResourcesError(FarmHaltError):
    """Raised when a task precondition on inventory counts is not met"""

    def __init__(self, resource: str, required: int, available: int):
        self.resource = resource
        self.required = required
        self.available = available
        super().__init__(f"Not enough {resource}: need {required}, have {available}")


class PlacementError(FarmHaltError):
    """Raised when a mandatory block placement fails"""
    pass


class RefuelError(FarmHaltError):
    """Raised when the turtle is low on fuel and refueling fails"""
    pass

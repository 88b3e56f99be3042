"""Result contract shared by every turtle primitive and guarded move."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

UNKNOWN_REASON = "Unknown reason"

__all__ = ["MoveOutcome", "UNKNOWN_REASON"]


class MoveOutcome(BaseModel):
    """Outcome of a single primitive call.

    ``reason`` is set if and only if the call failed.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    reason: Optional[str] = Field(None, description="Human-readable failure reason")

    @model_validator(mode="after")
    def check_reason_matches_success(self) -> "MoveOutcome":
        if self.success and self.reason is not None:
            raise ValueError("A successful outcome cannot carry a reason")
        if not self.success and not self.reason:
            raise ValueError("A failed outcome must carry a reason")
        return self

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls) -> "MoveOutcome":
        return cls(success=True)

    @classmethod
    def failed(cls, reason: Optional[str] = None) -> "MoveOutcome":
        return cls(success=False, reason=reason or UNKNOWN_REASON)

    @classmethod
    def from_result(cls, result: Any) -> "MoveOutcome":
        """Adapt a raw surface result.

        Accepts an existing outcome, a bare bool, or a ``(success, reason)``
        tuple as returned by the in-game turtle API.
        """
        if isinstance(result, MoveOutcome):
            return result
        if isinstance(result, (tuple, list)):
            success = bool(result[0]) if result else False
            reason = result[1] if len(result) > 1 else None
        else:
            success, reason = bool(result), None
        return cls.ok() if success else cls.failed(reason)

"""Terminal results of a command pipeline.

An Outcome is either a success carrying ``data`` or a failure carrying an
``OutcomeError``. Steps produce Outcomes instead of raising so the runner's
control flow stays linear.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import PipelineError


class ErrorCode(str, Enum):
    """Error codes reported in failed Outcomes."""

    INVALID_ARGS = "INVALID_ARGS"
    FETCH_FAILED = "FETCH_FAILED"
    NO_PROJECTS_FOUND = "NO_PROJECTS_FOUND"
    NO_SCREENS_FOUND = "NO_SCREENS_FOUND"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    TOOL_CALL_FAILED = "TOOL_CALL_FAILED"
    VIRTUAL_TOOL_FAILED = "VIRTUAL_TOOL_FAILED"
    INVALID_ROUTES = "INVALID_ROUTES"
    GENERATE_FAILED = "GENERATE_FAILED"


@dataclass(frozen=True)
class OutcomeError:
    """Failure details of an Outcome."""

    code: ErrorCode
    message: str
    # Reserved for retry guidance; no producer sets it yet.
    recoverable: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "code": self.code.value,
            "message": self.message,
            "recoverable": self.recoverable,
        }


@dataclass(frozen=True)
class Outcome:
    """Tagged success/failure result of one pipeline run."""

    success: bool
    data: Any = None
    error: OutcomeError | None = None

    def __post_init__(self) -> None:
        if self.success and self.error is not None:
            raise ValueError("A successful Outcome cannot carry an error")
        if not self.success and self.error is None:
            raise ValueError("A failed Outcome must carry an error")
        if not self.success and self.data is not None:
            raise ValueError("A failed Outcome cannot carry data")

    @classmethod
    def ok(cls, data: Any = None) -> "Outcome":
        """Build a success Outcome."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: ErrorCode, message: str, recoverable: bool = False) -> "Outcome":
        """Build a failure Outcome."""
        return cls(
            success=False,
            error=OutcomeError(code=code, message=message, recoverable=recoverable),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire shape used for JSON output."""
        if self.success:
            return {"success": True, "data": self.data}
        if self.error is None:
            raise PipelineError("Failed Outcome carries no error")
        return {"success": False, "error": self.error.to_dict()}

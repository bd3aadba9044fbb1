"""Execution context shared by the steps of one pipeline run."""

from dataclasses import dataclass
from typing import TypeVar

from .errors import PipelineError
from .outcome import Outcome

T = TypeVar("T")


def require(value: T | None, what: str) -> T:
    """Return state an earlier step was expected to set.

    Raises:
        PipelineError: If ``value`` is None
    """
    if value is None:
        raise PipelineError(f"Pipeline state not set: {what}")
    return value


@dataclass
class ExecutionContext:
    """Base context: holds the write-once terminal result.

    Command pipelines subclass this with their own input, client handle and
    intermediate state.
    """

    result: Outcome | None = None

    @property
    def finished(self) -> bool:
        """Whether a terminal result has been set."""
        return self.result is not None

    @property
    def outcome(self) -> Outcome:
        """The terminal result.

        Raises:
            PipelineError: If no step has set it
        """
        if self.result is None:
            raise PipelineError("No step produced a result")
        return self.result

    def finish(self, outcome: Outcome) -> None:
        """Set the terminal result.

        Raises:
            PipelineError: If a result was already set
        """
        if self.result is not None:
            raise PipelineError("Pipeline result is already set")
        self.result = outcome

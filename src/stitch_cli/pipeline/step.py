"""Step contract for command pipelines."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .context import ExecutionContext

ContextT = TypeVar("ContextT", bound=ExecutionContext)


class Step(ABC, Generic[ContextT]):
    """A single unit of pipeline work.

    ``should_run`` is a pure predicate over the context: it must not mutate
    it and may be evaluated more than once. ``run`` either fills in
    intermediate state for later steps or finishes the context with an
    Outcome. Failures are captured as failed Outcomes, not raised.
    """

    id: str = ""
    name: str = ""

    @abstractmethod
    def should_run(self, context: ContextT) -> bool:
        """Return True if this step applies to the current context."""

    @abstractmethod
    async def run(self, context: ContextT) -> None:
        """Perform the step, mutating the context in place."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"

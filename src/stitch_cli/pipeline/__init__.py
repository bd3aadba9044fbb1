"""Step-based command pipeline.

- ExecutionContext: per-run state with a write-once result
- Step: applicability check plus run action
- run_steps: ordered, short-circuiting runner
- Outcome: tagged success/failure result
"""

from .context import ExecutionContext, require
from .errors import PipelineError
from .outcome import ErrorCode, Outcome, OutcomeError
from .runner import run_steps
from .step import Step

__all__ = [
    "ErrorCode",
    "ExecutionContext",
    "Outcome",
    "OutcomeError",
    "PipelineError",
    "Step",
    "require",
    "run_steps",
]

"""Pipeline runner.

Runs steps strictly in registration order and stops at the first step that
sets a result. The runner does no error translation of its own.
"""

from collections.abc import Sequence

from ..shared.logging import get_logger
from .errors import PipelineError
from .step import ContextT, Step

logger = get_logger(__name__)


async def run_steps(steps: Sequence[Step[ContextT]], context: ContextT) -> ContextT:
    """Run an ordered sequence of steps against a context.

    Args:
        steps: Steps in the order they should be considered
        context: Fresh context for this run

    Returns:
        The same context, with ``result`` set

    Raises:
        PipelineError: If no step produced a result
    """
    for step in steps:
        if not step.should_run(context):
            logger.debug("step skipped", step=step.id)
            continue

        logger.debug("step started", step=step.id)
        await step.run(context)

        if context.result is not None:
            logger.debug("pipeline finished", step=step.id, success=context.result.success)
            return context

    raise PipelineError("No step produced a result")

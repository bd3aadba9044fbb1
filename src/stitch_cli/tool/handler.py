"""Tool command handler."""

from collections.abc import Sequence

from ..pipeline import Outcome, Step, run_steps
from ..remote.protocol import RemoteClient
from ..shared.logging import get_logger
from .context import ToolContext
from .models import ToolCommandInput, VirtualTool
from .steps import ExecuteToolStep, ListToolsStep, ParseArgsStep, ShowSchemaStep
from .virtual import DEFAULT_VIRTUAL_TOOLS

logger = get_logger(__name__)


class ToolCommandHandler:
    """Lists, describes, or invokes tools (virtual first, then remote)."""

    def __init__(self, client: RemoteClient, tools: Sequence[VirtualTool] | None = None):
        self.client = client
        self.virtual_tools = tuple(DEFAULT_VIRTUAL_TOOLS if tools is None else tools)
        self.steps: list[Step[ToolContext]] = [
            ListToolsStep(),
            ShowSchemaStep(),
            ParseArgsStep(),
            ExecuteToolStep(),
        ]

    async def execute(self, input: ToolCommandInput) -> Outcome:
        context = ToolContext(
            input=input,
            client=self.client,
            virtual_tools=self.virtual_tools,
        )
        try:
            await run_steps(self.steps, context)
        finally:
            try:
                await self.client.close()
            except Exception as e:
                logger.debug("ignoring client close failure", error=str(e))

        return context.outcome

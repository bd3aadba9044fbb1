"""The tool command: list, describe, or invoke remote and virtual tools."""

from .context import ToolContext
from .handler import ToolCommandHandler
from .models import LIST_TOOLS, ToolCommandInput, VirtualTool, find_virtual_tool
from .steps import ExecuteToolStep, ListToolsStep, ParseArgsStep, ShowSchemaStep
from .virtual import DEFAULT_VIRTUAL_TOOLS

__all__ = [
    "DEFAULT_VIRTUAL_TOOLS",
    "ExecuteToolStep",
    "LIST_TOOLS",
    "ListToolsStep",
    "ParseArgsStep",
    "ShowSchemaStep",
    "ToolCommandHandler",
    "ToolCommandInput",
    "ToolContext",
    "VirtualTool",
    "find_virtual_tool",
]

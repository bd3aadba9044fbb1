"""Contracts of the tool command: input, tool descriptors, virtual tools."""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..remote.protocol import RemoteClient

OutputFormat = Literal["json", "pretty", "raw"]

# Tool name that means "list tools" rather than invoking one
LIST_TOOLS = "list"


class ToolCommandInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tool_name: str | None = Field(default=None, alias="toolName")  # None = list tools
    show_schema: bool = Field(default=False, alias="showSchema")
    data: str | None = None  # JSON string like curl -d
    data_file: str | None = Field(default=None, alias="dataFile")  # @file.json like curl
    output: OutputFormat = "pretty"

    @property
    def wants_list(self) -> bool:
        return not self.tool_name or self.tool_name == LIST_TOOLS


VirtualToolFn = Callable[[RemoteClient, dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class VirtualTool:
    """A local override for a remote tool of the same name."""

    name: str
    execute: VirtualToolFn
    description: str = ""
    input_schema: dict[str, Any] = field(default_factory=dict)

    def describe(self) -> dict[str, Any]:
        """Descriptor in the same shape as a server ``tools/list`` entry."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def find_virtual_tool(tools: Sequence[VirtualTool], name: str) -> VirtualTool | None:
    """First tool whose name matches exactly, in registration order."""
    return next((tool for tool in tools if tool.name == name), None)

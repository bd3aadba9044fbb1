"""Steps of the tool command pipeline.

ListTools | ShowSchema | (ParseArgs -> ExecuteTool)
"""

import json
from typing import Any

from ..pipeline import ErrorCode, Outcome, Step, require
from ..shared.logging import get_logger
from ..utils import parse_tool_args
from .context import ToolContext
from .models import find_virtual_tool

logger = get_logger(__name__)

VIRTUAL_TOOL_FAILURE_PREFIX = "Virtual tool execution failed"


async def _all_tools(context: ToolContext) -> list[dict[str, Any]]:
    """Virtual tool descriptors followed by the server's tools."""
    capabilities = await context.client.get_capabilities()
    server_tools = capabilities.get("tools") or []
    return [tool.describe() for tool in context.virtual_tools] + list(server_tools)


class ListToolsStep(Step[ToolContext]):
    id = "list-tools"
    name = "List available tools"

    def should_run(self, context: ToolContext) -> bool:
        return context.input.wants_list

    async def run(self, context: ToolContext) -> None:
        try:
            tools = await _all_tools(context)
        except Exception as e:
            context.finish(Outcome.fail(ErrorCode.FETCH_FAILED, f"Failed to list tools: {e}"))
            return
        context.finish(Outcome.ok(tools))


class ShowSchemaStep(Step[ToolContext]):
    id = "show-schema"
    name = "Show tool schema"

    def should_run(self, context: ToolContext) -> bool:
        return not context.input.wants_list and context.input.show_schema

    async def run(self, context: ToolContext) -> None:
        tool_name = context.input.tool_name
        try:
            tools = await _all_tools(context)
        except Exception as e:
            context.finish(Outcome.fail(ErrorCode.FETCH_FAILED, f"Failed to list tools: {e}"))
            return

        tool = next((t for t in tools if t.get("name") == tool_name), None)
        if tool is None:
            context.finish(Outcome.fail(ErrorCode.TOOL_NOT_FOUND, f"Tool not found: {tool_name}"))
            return

        context.finish(Outcome.ok(format_schema(tool)))


def format_schema(tool: dict[str, Any]) -> dict[str, Any]:
    """Summarize a tool's input schema for humans."""
    schema = tool.get("inputSchema") or {}
    properties: dict[str, Any] = schema.get("properties") or {}
    required = schema.get("required") or []

    arguments: dict[str, str] = {}
    for key, prop in properties.items():
        flag = "(required)" if key in required else "(optional)"
        description = f" - {prop['description']}" if prop.get("description") else ""
        arguments[key] = f"{prop.get('type')} {flag}{description}"

    return {
        "name": tool.get("name"),
        "description": tool.get("description"),
        "arguments": arguments,
        "example": generate_example(tool),
    }


def generate_example(tool: dict[str, Any]) -> str:
    """Example invocation with placeholder values."""
    properties: dict[str, Any] = (tool.get("inputSchema") or {}).get("properties") or {}
    example_args = {
        key: f"<{key}>" if prop.get("type") == "string" else f"<{prop.get('type')}>"
        for key, prop in properties.items()
    }
    payload = json.dumps(example_args, separators=(",", ":"))
    return f"stitch-mcp tool {tool.get('name')} -d '{payload}'"


class ParseArgsStep(Step[ToolContext]):
    id = "parse-args"
    name = "Parse tool arguments"

    def should_run(self, context: ToolContext) -> bool:
        return (
            not context.input.wants_list
            and not context.input.show_schema
            and context.parsed_args is None
        )

    async def run(self, context: ToolContext) -> None:
        try:
            context.parsed_args = parse_tool_args(context.input.data, context.input.data_file)
        except (OSError, ValueError) as e:
            context.finish(Outcome.fail(ErrorCode.INVALID_ARGS, str(e)))


class ExecuteToolStep(Step[ToolContext]):
    """Runs the tool: a matching virtual tool if registered, else the remote one."""

    id = "execute-tool"
    name = "Execute tool"

    def should_run(self, context: ToolContext) -> bool:
        return context.parsed_args is not None and context.result is None

    async def run(self, context: ToolContext) -> None:
        tool_name = require(context.input.tool_name, "tool name")
        args = require(context.parsed_args, "parsed arguments")

        virtual_tool = find_virtual_tool(context.virtual_tools, tool_name)
        if virtual_tool is not None:
            logger.debug("dispatching to virtual tool", tool=tool_name)
            try:
                data = await virtual_tool.execute(context.client, args)
            except Exception as e:
                context.finish(
                    Outcome.fail(
                        ErrorCode.VIRTUAL_TOOL_FAILED,
                        f"{VIRTUAL_TOOL_FAILURE_PREFIX}: {e}",
                    )
                )
                return
            context.finish(Outcome.ok(data))
            return

        try:
            data = await context.client.call_tool(tool_name, args)
        except Exception as e:
            context.finish(Outcome.fail(ErrorCode.TOOL_CALL_FAILED, str(e)))
            return
        context.finish(Outcome.ok(data))

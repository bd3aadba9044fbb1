"""Unit tests for ToolCommandHandler."""

from unittest.mock import AsyncMock

import pytest

from stitch_cli.pipeline import ErrorCode
from stitch_cli.tool import DEFAULT_VIRTUAL_TOOLS, ToolCommandHandler, ToolCommandInput, VirtualTool

pytestmark = pytest.mark.pipeline


class TestToolCommandHandler:
    def test_default_virtual_tools_order(self, mock_client):
        handler = ToolCommandHandler(mock_client)
        assert [t.name for t in handler.virtual_tools] == [
            "get_screen_code",
            "get_screen_image",
            "build_site",
        ]
        assert handler.virtual_tools == DEFAULT_VIRTUAL_TOOLS

    @pytest.mark.asyncio
    async def test_invokes_remote_tool(self, mock_client):
        mock_client.call_tool.return_value = {"projects": []}
        handler = ToolCommandHandler(mock_client, tools=[])

        outcome = await handler.execute(ToolCommandInput(tool_name="list_projects", data="{}"))

        assert outcome.success is True
        assert outcome.data == {"projects": []}
        mock_client.call_tool.assert_awaited_once_with("list_projects", {})
        mock_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_invokes_virtual_tool(self, mock_client):
        tool = VirtualTool(name="list_projects", execute=AsyncMock(return_value=["local"]))
        handler = ToolCommandHandler(mock_client, tools=[tool])

        outcome = await handler.execute(ToolCommandInput(tool_name="list_projects"))

        assert outcome.data == ["local"]
        mock_client.call_tool.assert_not_called()

    @pytest.mark.asyncio
    async def test_lists_tools(self, mock_client, sample_tools):
        mock_client.get_capabilities.return_value = {"tools": sample_tools}
        handler = ToolCommandHandler(mock_client)

        outcome = await handler.execute(ToolCommandInput())

        names = [t["name"] for t in outcome.data]
        assert names[:3] == ["get_screen_code", "get_screen_image", "build_site"]
        assert "list_projects" in names

    @pytest.mark.asyncio
    async def test_invalid_args_still_closes_client(self, mock_client):
        handler = ToolCommandHandler(mock_client, tools=[])

        outcome = await handler.execute(ToolCommandInput(tool_name="x", data="[1, 2]"))

        assert outcome.error.code == ErrorCode.INVALID_ARGS
        mock_client.call_tool.assert_not_called()
        mock_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_failure_does_not_replace_outcome(self, mock_client):
        mock_client.call_tool.return_value = "ok"
        mock_client.close.side_effect = Exception("close failed")
        handler = ToolCommandHandler(mock_client, tools=[])

        outcome = await handler.execute(ToolCommandInput(tool_name="x"))

        assert outcome.success is True
        assert outcome.data == "ok"

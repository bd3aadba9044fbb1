"""Shared test fixtures for stitch-cli tests.

- mock_client: AsyncMock standing in for the remote MCP client
- sample_tools / sample_screens: canned server payloads
- isolated_config: points the CLI config file at a temp dir
"""

from typing import Any
from unittest.mock import AsyncMock, patch

import pytest


@pytest.fixture
def mock_client() -> AsyncMock:
    """Remote client double; every operation is an AsyncMock."""
    client = AsyncMock()
    client.connect = AsyncMock(return_value=None)
    client.call_tool = AsyncMock(return_value={})
    client.read_resource = AsyncMock(return_value={})
    client.list_resources = AsyncMock(return_value={})
    client.get_capabilities = AsyncMock(return_value={"tools": []})
    client.close = AsyncMock(return_value=None)
    return client


@pytest.fixture
def sample_tools() -> list[dict[str, Any]]:
    """Tools as returned by tools/list."""
    return [
        {
            "name": "list_projects",
            "description": "List all projects",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "get_screen",
            "description": "Get a screen",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "projectId": {"type": "string", "description": "Project ID"},
                    "screenId": {"type": "string"},
                    "pageSize": {"type": "number"},
                },
                "required": ["projectId", "screenId"],
            },
        },
    ]


def make_screen(name: str, title: str, html: bool = True) -> dict[str, Any]:
    """A list_screens entry."""
    screen: dict[str, Any] = {"name": name, "title": title}
    if html:
        screen["htmlCode"] = {"downloadUrl": f"https://cdn.example.com/{name}.html"}
    return screen


@pytest.fixture
def sample_screens() -> list[dict[str, Any]]:
    """Screens of a small project: a home page, an about page, an artifact."""
    return [
        make_screen("s-home", "Home"),
        make_screen("s-about", "About Us"),
        make_screen("s-logo", "logo.png"),
    ]


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Config file under tmp_path, with no STITCH_* environment overrides."""
    from stitch_cli.config import ENV_VARS

    for env_var in ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)

    config_file = tmp_path / "config.yaml"
    with patch("stitch_cli.config.get_config_path", return_value=config_file):
        yield config_file

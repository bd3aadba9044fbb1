"""Fetches a project's screens and their rendered HTML."""

from typing import Any

from ..remote.downloads import download_text
from ..remote.protocol import RemoteClient
from .schemas import RemoteScreen

MANIFEST_PAGE_SIZE = 1000


class ProjectSyncer:
    """Reads project screens through the remote client."""

    def __init__(self, client: RemoteClient):
        self.client = client

    async def fetch_manifest(self, project_id: str) -> list[RemoteScreen]:
        """List all screens of a project.

        Raises:
            Exception: Whatever the client raises; pydantic ValidationError
                for malformed screen entries
        """
        response: Any = await self.client.call_tool(
            "list_screens", {"projectId": project_id, "pageSize": MANIFEST_PAGE_SIZE}
        )
        screens = response.get("screens") if isinstance(response, dict) else None
        return [RemoteScreen.model_validate(s) for s in screens or []]

    async def fetch_content(self, url: str) -> str:
        """Download a screen's rendered HTML."""
        return await download_text(url)

"""Screen virtual tools: get_screen plus the downloaded asset."""

import base64
from typing import Any

from ...remote.downloads import download_bytes, download_text
from ...remote.protocol import RemoteClient
from ...shared.logging import get_logger
from ..models import VirtualTool

logger = get_logger(__name__)

SCREEN_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "projectId": {
            "type": "string",
            "description": "Required. The project ID of screen to retrieve.",
        },
        "screenId": {
            "type": "string",
            "description": "Required. The name of screen to retrieve.",
        },
    },
    "required": ["projectId", "screenId"],
}


async def _get_screen(client: RemoteClient, args: dict[str, Any]) -> dict[str, Any]:
    screen = await client.call_tool(
        "get_screen", {"projectId": args.get("projectId"), "screenId": args.get("screenId")}
    )
    return screen if isinstance(screen, dict) else {"screen": screen}


def _download_url(screen: dict[str, Any], key: str) -> str | None:
    ref = screen.get(key)
    return ref.get("downloadUrl") if isinstance(ref, dict) else None


async def get_screen_code(client: RemoteClient, args: dict[str, Any]) -> dict[str, Any]:
    screen = await _get_screen(client, args)

    html_content: str | None = None
    url = _download_url(screen, "htmlCode")
    if url:
        try:
            html_content = await download_text(url)
        except Exception as e:
            logger.warning("failed to download HTML code", error=str(e))

    return {**screen, "htmlContent": html_content}


async def get_screen_image(client: RemoteClient, args: dict[str, Any]) -> dict[str, Any]:
    screen = await _get_screen(client, args)

    screenshot_base64: str | None = None
    url = _download_url(screen, "screenshot")
    if url:
        try:
            image = await download_bytes(url)
            screenshot_base64 = base64.b64encode(image).decode("ascii")
        except Exception as e:
            logger.warning("failed to download screenshot", error=str(e))

    return {**screen, "screenshotBase64": screenshot_base64}


GET_SCREEN_CODE = VirtualTool(
    name="get_screen_code",
    description="(Virtual) Retrieves a screen and downloads its HTML code content.",
    input_schema=SCREEN_INPUT_SCHEMA,
    execute=get_screen_code,
)

GET_SCREEN_IMAGE = VirtualTool(
    name="get_screen_image",
    description="(Virtual) Retrieves a screen and downloads its screenshot image as base64.",
    input_schema=SCREEN_INPUT_SCHEMA,
    execute=get_screen_image,
)

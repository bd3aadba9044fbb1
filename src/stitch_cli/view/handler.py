"""View command handler: reads one resource through the remote client."""

import json
import re
from typing import Any

from ..pipeline import ErrorCode, Outcome
from ..remote.protocol import RemoteClient
from ..shared.logging import get_logger
from .models import NO_SELECTOR_MESSAGE, ViewInput

logger = get_logger(__name__)

_PROJECT_NAME_RE = re.compile(r"^projects/[^/]+$")
_SCREEN_NAME_RE = re.compile(r"^projects/[^/]+/screens/[^/]+$")


def resource_uri(input: ViewInput) -> str | None:
    """Resource to read for the given selectors, or None when none is set.

    ``projects`` is not a resource read and is handled by the caller.

    Raises:
        ValueError: If ``name`` or ``source_screen`` is not a project or
            screen resource name
    """
    if input.name:
        if not (_PROJECT_NAME_RE.match(input.name) or _SCREEN_NAME_RE.match(input.name)):
            raise ValueError(f"Invalid resource name format: {input.name}")
        return input.name
    if input.source_screen:
        if not _SCREEN_NAME_RE.match(input.source_screen):
            raise ValueError(f"Invalid source screen format: {input.source_screen}")
        return input.source_screen
    if input.project and input.screen:
        return f"projects/{input.project}/screens/{input.screen}"
    if input.project:
        return f"projects/{input.project}"
    return None


def decode_contents(data: Any) -> Any:
    """Replace JSON ``text`` in resource contents with a parsed ``data`` field."""
    if not isinstance(data, dict) or not isinstance(data.get("contents"), list):
        return data

    contents = []
    for item in data["contents"]:
        if isinstance(item, dict) and isinstance(item.get("text"), str):
            try:
                parsed = json.loads(item["text"])
            except json.JSONDecodeError:
                contents.append(item)
                continue
            decoded = {k: v for k, v in item.items() if k != "text"}
            decoded["data"] = parsed
            contents.append(decoded)
        else:
            contents.append(item)
    return {**data, "contents": contents}


class ViewHandler:
    """Fetches a project, a screen, or the project list for viewing."""

    def __init__(self, client: RemoteClient):
        self.client = client

    async def execute(self, input: ViewInput) -> Outcome:
        try:
            if input.projects:
                data = await self.client.call_tool("list_projects", {})
            else:
                try:
                    uri = resource_uri(input)
                except ValueError as e:
                    return Outcome.fail(ErrorCode.INVALID_ARGS, str(e))
                if uri is None:
                    return Outcome.fail(ErrorCode.INVALID_ARGS, NO_SELECTOR_MESSAGE)
                logger.debug("reading resource", uri=uri)
                data = await self.client.read_resource(uri)
            return Outcome.ok(decode_contents(data))
        except Exception as e:
            return Outcome.fail(ErrorCode.FETCH_FAILED, str(e))
        finally:
            try:
                await self.client.close()
            except Exception as e:
                logger.debug("ignoring client close failure", error=str(e))

"""Projects command handler: lists the caller's projects."""

from typing import Any

from .pipeline import ErrorCode, Outcome
from .remote.protocol import RemoteClient
from .shared.logging import get_logger

logger = get_logger(__name__)


def filter_projects(projects: list[dict[str, Any]], query: str | None) -> list[dict[str, Any]]:
    """Keep projects whose title or name contains ``query`` (case-insensitive)."""
    if not query:
        return projects
    needle = query.lower()
    return [
        p
        for p in projects
        if needle in str(p.get("title", "")).lower() or needle in str(p.get("name", "")).lower()
    ]


class ProjectsHandler:
    def __init__(self, client: RemoteClient):
        self.client = client

    async def execute(self, filter: str | None = None) -> Outcome:
        try:
            response = await self.client.call_tool("list_projects", {})
        except Exception as e:
            return Outcome.fail(ErrorCode.FETCH_FAILED, f"Failed to list projects: {e}")
        finally:
            try:
                await self.client.close()
            except Exception as e:
                logger.debug("ignoring client close failure", error=str(e))

        projects = response.get("projects") if isinstance(response, dict) else response
        if projects is None:
            projects = []
        if not isinstance(projects, list) or not all(isinstance(p, dict) for p in projects):
            logger.debug("unexpected list_projects payload", payload=repr(response)[:200])
            return Outcome.fail(ErrorCode.FETCH_FAILED, "Unexpected list_projects response")

        matches = filter_projects(projects, filter)
        if not matches:
            message = f"No projects matching '{filter}'" if filter else "No projects found"
            return Outcome.fail(ErrorCode.NO_PROJECTS_FOUND, message)
        return Outcome.ok(matches)

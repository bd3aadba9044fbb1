"""Remote client contract consumed by command pipelines.

Pipelines depend on this protocol only; the concrete transport lives in
``stitch_cli.remote.client``.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RemoteClient(Protocol):
    """Session-scoped client for the remote design service."""

    async def connect(self) -> None:
        """Open the session. Idempotent."""
        ...

    async def call_tool(self, name: str, args: dict[str, Any]) -> Any:
        """Invoke a named remote operation and return its decoded result."""
        ...

    async def read_resource(self, uri: str) -> dict[str, Any]:
        """Read a named resource."""
        ...

    async def list_resources(self) -> dict[str, Any]:
        """Enumerate available resources."""
        ...

    async def get_capabilities(self) -> dict[str, Any]:
        """Fetch capability metadata (the ``tools/list`` result)."""
        ...

    async def close(self) -> None:
        """Close the session and release transport resources."""
        ...

"""StitchMCPClient - MCP streamable HTTP client for the Stitch server.

Handles the MCP transport:
- POST <base_url> for JSON-RPC requests, answered as JSON or as an SSE stream
- Mcp-Session-Id header tracking after initialize
- DELETE <base_url> to end the session on close
"""

import json
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import httpx
from httpx_sse import EventSource

from ..shared.logging import get_logger
from .errors import (
    CLIENT_TOOL_ERROR,
    JSONRPC_INTERNAL_ERROR,
    StitchClientError,
    map_connection_error,
    map_http_error,
    map_jsonrpc_error,
)

if TYPE_CHECKING:
    from ..config import CLIConfig

logger = get_logger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SESSION_HEADER = "Mcp-Session-Id"
CLIENT_INFO = {"name": "stitch-cli", "version": "1.0.0"}


class StitchMCPClient:
    """Authenticated MCP client for the Stitch server.

    Implements the RemoteClient protocol. The session is opened lazily by the
    first call, or explicitly via ``connect()``; use ``async with`` or call
    ``close()`` to release it.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        access_token: str | None = None,
        project_id: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            base_url: MCP endpoint (e.g., https://stitch.googleapis.com/mcp)
            api_key: API key, sent as X-Goog-Api-Key
            access_token: OAuth access token, used when no API key is set
            project_id: Quota project for OAuth requests
            timeout: Request timeout in seconds
            transport: Optional httpx transport override

        Raises:
            ValueError: If URL is invalid
        """
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL: {base_url}")

        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.project_id = project_id
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._connected = False
        self._session_id: str | None = None
        self._request_id = 0
        self._server_info: dict[str, Any] | None = None

    @classmethod
    def from_config(cls, config: "CLIConfig") -> "StitchMCPClient":
        """Build a client from CLI configuration."""
        return cls(
            base_url=config.base_url,
            api_key=config.api_key,
            access_token=config.access_token,
            project_id=config.project_id,
            timeout=float(config.timeout),
        )

    async def __aenter__(self) -> "StitchMCPClient":
        """Enter async context."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context."""
        await self.close()

    @property
    def is_connected(self) -> bool:
        """Whether the MCP session is open."""
        return self._connected

    @property
    def server_info(self) -> dict[str, Any] | None:
        """serverInfo returned by initialize."""
        return self._server_info

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers including credentials."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json, text/event-stream",
        }
        if self.api_key:
            headers["X-Goog-Api-Key"] = self.api_key
        else:
            if self.access_token:
                headers["Authorization"] = f"Bearer {self.access_token}"
            if self.project_id:
                headers["X-Goog-User-Project"] = self.project_id
        return headers

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _post(self, message: dict[str, Any]) -> dict[str, Any] | None:
        """POST one JSON-RPC message.

        Args:
            message: JSON-RPC request or notification

        Returns:
            JSON-RPC response for requests, None for notifications

        Raises:
            StitchClientError: On connection, HTTP or stream errors
        """
        client = self._ensure_client()
        headers = {SESSION_HEADER: self._session_id} if self._session_id else None

        try:
            async with client.stream(
                "POST", self.base_url, json=message, headers=headers
            ) as response:
                if response.status_code >= 400:
                    await response.aread()
                    raise map_http_error(response.status_code, response.text)

                session_id = response.headers.get(SESSION_HEADER)
                if session_id:
                    self._session_id = session_id

                if "id" not in message or response.status_code == 202:
                    return None

                content_type = response.headers.get("content-type", "")
                if content_type.startswith("text/event-stream"):
                    return await self._read_event_stream(EventSource(response), message["id"])

                await response.aread()
                return response.json()

        except httpx.ConnectError as e:
            raise map_connection_error(str(e), self.base_url) from e
        except httpx.TimeoutException as e:
            raise map_connection_error(str(e), self.base_url, is_timeout=True) from e
        except httpx.TransportError as e:
            raise map_connection_error(str(e), self.base_url) from e

    async def _read_event_stream(self, event_source: EventSource, request_id: int) -> dict[str, Any]:
        """Read SSE events until the response for ``request_id`` arrives."""
        async for sse in event_source.aiter_sse():
            if not sse.data:
                continue
            try:
                event = json.loads(sse.data)
            except json.JSONDecodeError:
                logger.warning("invalid JSON in SSE event", data=sse.data)
                continue
            if event.get("id") == request_id and ("result" in event or "error" in event):
                return event
            logger.debug("ignoring SSE event", event=sse.event, method=event.get("method"))

        raise StitchClientError(
            code=JSONRPC_INTERNAL_ERROR,
            message=f"Event stream ended without a response to request {request_id}",
        )

    async def _rpc(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a JSON-RPC request and return its result."""
        self._request_id += 1
        request = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or {},
        }
        logger.debug("rpc request", method=method, id=self._request_id)

        response = await self._post(request)
        if response is None:
            raise StitchClientError(
                code=JSONRPC_INTERNAL_ERROR,
                message=f"No response to {method}",
            )
        if "error" in response:
            raise map_jsonrpc_error(response["error"])
        return response.get("result", {})

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    async def connect(self) -> None:
        """Open the MCP session (initialize + initialized notification)."""
        if self._connected:
            return

        result = await self._rpc(
            "initialize",
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": CLIENT_INFO,
            },
        )
        self._server_info = result.get("serverInfo")
        await self._post({"jsonrpc": "2.0", "method": "notifications/initialized"})
        self._connected = True
        logger.info("mcp session initialized", server=self._server_info)

    async def close(self) -> None:
        """End the session and close the HTTP client."""
        if self._client is None:
            return

        client = self._client
        try:
            if self._session_id:
                try:
                    response = await client.delete(
                        self.base_url, headers={SESSION_HEADER: self._session_id}
                    )
                except httpx.HTTPError as e:
                    raise map_connection_error(str(e), self.base_url) from e
                # Servers may not support explicit session termination
                if response.status_code >= 400 and response.status_code != 405:
                    raise map_http_error(response.status_code, response.text)
        finally:
            self._client = None
            self._connected = False
            self._session_id = None
            await client.aclose()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def call_tool(self, name: str, args: dict[str, Any]) -> Any:
        """Invoke a remote tool.

        Args:
            name: Tool name
            args: Tool arguments

        Returns:
            structuredContent if present, else the first text block decoded
            as JSON (or the text itself), else the raw result

        Raises:
            StitchClientError: On transport errors or a tool-level error
        """
        await self.connect()
        result = await self._rpc("tools/call", {"name": name, "arguments": args})
        content = result.get("content") or []

        if result.get("isError"):
            error_text = "".join(c.get("text", "") for c in content if c.get("type") == "text")
            raise StitchClientError(
                code=CLIENT_TOOL_ERROR,
                message=f"Tool Call Failed [{name}]: {error_text}",
            )

        if result.get("structuredContent") is not None:
            return result["structuredContent"]

        text_block = next((c for c in content if c.get("type") == "text"), None)
        if text_block is not None:
            try:
                return json.loads(text_block.get("text", ""))
            except json.JSONDecodeError:
                return text_block.get("text", "")

        return result

    async def read_resource(self, uri: str) -> dict[str, Any]:
        """Read a resource by URI/name."""
        await self.connect()
        return await self._rpc("resources/read", {"uri": uri})

    async def list_resources(self) -> dict[str, Any]:
        """List resources exposed by the server."""
        await self.connect()
        return await self._rpc("resources/list")

    async def get_capabilities(self) -> dict[str, Any]:
        """List server tools (``tools/list``)."""
        await self.connect()
        return await self._rpc("tools/list")

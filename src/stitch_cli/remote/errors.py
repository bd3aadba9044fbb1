"""Error mapping for the remote client.

Maps HTTP status codes, connection failures and JSON-RPC error objects to
StitchClientError.
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlparse

# JSON-RPC error codes
JSONRPC_PARSE_ERROR = -32700
JSONRPC_INVALID_REQUEST = -32600
JSONRPC_METHOD_NOT_FOUND = -32601
JSONRPC_INVALID_PARAMS = -32602
JSONRPC_INTERNAL_ERROR = -32603
JSONRPC_SERVER_ERROR = -32000

# Client-side codes
CLIENT_AUTH_ERROR = -32001
CLIENT_CONNECTION_ERROR = -32002
CLIENT_TIMEOUT_ERROR = -32003
CLIENT_TOOL_ERROR = -32004


@dataclass
class StitchClientError(Exception):
    """Error raised by the remote client."""

    code: int
    message: str
    retryable: bool = False
    data: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


def map_http_error(status_code: int, message: str) -> StitchClientError:
    """Map HTTP status code to StitchClientError.

    Args:
        status_code: HTTP status code
        message: Error message from response

    Returns:
        StitchClientError with a code matching the status
    """
    data = {"original_message": message, "http_status": status_code}
    if status_code in (401, 403):
        return StitchClientError(
            code=CLIENT_AUTH_ERROR,
            message=f"Authentication failed: {message}" if message else "Authentication failed",
            data=data,
        )
    elif status_code == 404:
        return StitchClientError(
            code=JSONRPC_METHOD_NOT_FOUND,
            message=f"Not found: {message}" if message else "Not found",
            data=data,
        )
    elif status_code in (408, 504):
        return StitchClientError(
            code=CLIENT_TIMEOUT_ERROR,
            message=f"Request timeout: {message}" if message else "Request timeout",
            retryable=True,
            data=data,
        )
    elif status_code >= 500:
        return StitchClientError(
            code=JSONRPC_SERVER_ERROR,
            message=f"Server error: {message}" if message else "Server error",
            retryable=status_code in (502, 503),
            data=data,
        )
    else:
        return StitchClientError(
            code=JSONRPC_SERVER_ERROR,
            message=f"HTTP error {status_code}: {message}",
            data=data,
        )


def map_connection_error(error_message: str, url: str, is_timeout: bool = False) -> StitchClientError:
    """Map a transport failure to StitchClientError.

    Args:
        error_message: Error message from exception
        url: URL that was being accessed
        is_timeout: Whether this was a timeout error

    Returns:
        StitchClientError
    """
    if is_timeout:
        return StitchClientError(
            code=CLIENT_TIMEOUT_ERROR,
            message=f"Request timeout connecting to {url}",
            retryable=True,
            data={"url": url, "original_error": error_message},
        )

    parsed = urlparse(url)
    host_port = f"{parsed.hostname}:{parsed.port}" if parsed.port else parsed.hostname

    return StitchClientError(
        code=CLIENT_CONNECTION_ERROR,
        message=f"Cannot reach Stitch MCP server at {host_port}",
        retryable=True,
        data={"url": url, "original_error": error_message},
    )


def map_jsonrpc_error(error: dict[str, Any]) -> StitchClientError:
    """Convert a JSON-RPC error object from the server."""
    return StitchClientError(
        code=error.get("code", JSONRPC_SERVER_ERROR),
        message=error.get("message", "Unknown server error"),
        data=error.get("data") or {},
    )

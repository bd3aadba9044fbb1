"""Remote client for the Stitch MCP server."""

from .client import StitchMCPClient
from .errors import StitchClientError
from .protocol import RemoteClient

__all__ = ["RemoteClient", "StitchClientError", "StitchMCPClient"]

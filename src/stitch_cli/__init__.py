"""Stitch CLI - Command-line client for the Stitch MCP server."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stitch-cli")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for editable installs without metadata

from .main import main

__all__ = ["main", "__version__"]

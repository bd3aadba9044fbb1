"""Shared modules for stitch-cli: paths and logging."""

from .logging import configure_logging, get_logger
from .paths import CONFIG_FILE, STITCH_DIR, ensure_dirs

__all__ = [
    # Paths
    "STITCH_DIR",
    "CONFIG_FILE",
    "ensure_dirs",
    # Logging
    "configure_logging",
    "get_logger",
]

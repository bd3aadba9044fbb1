"""Path management for stitch-cli.

Manages the ~/.stitch-mcp/ directory.
"""

from pathlib import Path

# Base directory for all stitch-cli data
STITCH_DIR = Path.home() / ".stitch-mcp"

# CLI config file
CONFIG_FILE = STITCH_DIR / "config.yaml"


def ensure_dirs(base: Path | None = None) -> Path:
    """Create the data directory if missing (mode 0o700, user-only access).

    Args:
        base: Directory to create (defaults to STITCH_DIR)

    Returns:
        The directory
    """
    directory = base if base is not None else STITCH_DIR
    directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    return directory

"""CLI utility functions."""

import json
from pathlib import Path
from typing import Any

import yaml


def load_document(file_path: str | Path) -> Any:
    """Load a JSON or YAML file.

    Args:
        file_path: Path to the file; a leading "@" (curl style) is stripped

    Returns:
        Parsed document

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not valid JSON/YAML
    """
    path = Path(str(file_path).lstrip("@"))
    with path.open() as f:
        if path.suffix in [".yaml", ".yml"]:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e


def parse_tool_args(data: str | None, data_file: str | None) -> dict[str, Any]:
    """Parse tool arguments from a JSON string or a file.

    Args:
        data: JSON object string (like curl -d)
        data_file: Path to a JSON/YAML file (like curl -d @file)

    Returns:
        Arguments dict ({} when neither is given)

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not a JSON/YAML object
    """
    args: Any = {}

    if data:
        try:
            args = json.loads(data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON data: {e}") from e
    elif data_file:
        args = load_document(data_file)

    if args is None:
        return {}
    if not isinstance(args, dict):
        raise ValueError(f"Tool arguments must be a JSON object, got {type(args).__name__}")
    return args

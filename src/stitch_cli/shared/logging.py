"""Logging for stitch-mcp.

structlog on top of stdlib logging. Log lines go to stderr (or a log file),
never stdout, so ``-o json`` output stays machine-readable. Credential
values are masked before any renderer sees them.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

# Event keys and header names whose values are credentials
SECRET_FIELDS = frozenset({"api_key", "access_token", "authorization", "x-goog-api-key"})
REDACTED = "***"


def redact_secrets(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask credential values in an event, including inside a ``headers`` mapping."""
    for key, value in list(event_dict.items()):
        if key.lower() in SECRET_FIELDS and value:
            event_dict[key] = REDACTED
        elif key == "headers" and isinstance(value, dict):
            event_dict[key] = {
                name: REDACTED if name.lower() in SECRET_FIELDS else header
                for name, header in value.items()
            }
    return event_dict


def _build_handler(log_file: str | Path | None) -> logging.Handler:
    if not log_file:
        return logging.StreamHandler(sys.stderr)
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(str(path), encoding="utf-8")


def configure_logging(
    level: str = "warning",
    log_file: str | Path | None = None,
    json_output: bool = False,
) -> None:
    """Configure logging for one CLI invocation.

    Args:
        level: One of LOG_LEVELS; unknown names fall back to warning
        log_file: Append log lines to this file instead of stderr
        json_output: Render one JSON object per line (for log collectors)
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handler = _build_handler(log_file)
    handler.setLevel(log_level)
    logging.basicConfig(level=log_level, handlers=[handler], format="%(message)s", force=True)

    # httpx logs every request at info
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        colors = not log_file and sys.stderr.isatty()
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def verbosity_to_level(verbose: int, default: str = "warning") -> str:
    """Map a -v count to a log level name."""
    if verbose >= 2:
        return "debug"
    if verbose == 1:
        return "info"
    return default


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)

"""CLI output formatting helpers.

Results go to stdout via click; errors go to stderr via a rich console.
"""

import json
from typing import Any

import click
import yaml
from rich.console import Console
from rich.markup import escape

from .pipeline import OutcomeError

err_console = Console(stderr=True, soft_wrap=True)


def render_output(data: Any, fmt: str = "pretty") -> str:
    """Render command data for stdout.

    Args:
        data: Outcome data
        fmt: json (compact), pretty (indented JSON), or raw (strings as-is)
    """
    if fmt == "raw" and isinstance(data, str):
        return data
    if fmt == "json":
        return json.dumps(data, ensure_ascii=False)
    return json.dumps(data, indent=2, ensure_ascii=False)


def print_error(error: OutcomeError) -> None:
    """Print a failure Outcome's error to stderr."""
    err_console.print(
        f"[red]Error \\[{error.code.value}]:[/red] {escape(error.message)}", highlight=False
    )


def print_config_yaml(data: dict[str, Any], sources: dict[str, str] | None = None) -> None:
    """Print config as YAML, optionally annotated with each value's source.

    Args:
        data: Configuration values
        sources: Key -> where the value came from
    """
    if not sources:
        click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False))
        return

    for key, value in data.items():
        line = yaml.dump({key: value}, default_flow_style=False).strip()
        click.echo(f"{line}  # {sources.get(key, 'default')}")


def print_tools_list(tools: list[dict[str, Any]]) -> None:
    """Print tool names with truncated descriptions.

    Args:
        tools: Tool descriptors ({name, description, inputSchema})
    """
    click.echo(f"Tools ({len(tools)} total):\n")
    for tool in tools:
        desc = tool.get("description") or ""
        if len(desc) > 60:
            desc = desc[:60] + "..."
        click.echo(f"  - {tool.get('name', '?')}: {desc}")


def print_site_result(result: dict[str, Any]) -> None:
    """Print the pages of a generated site."""
    click.echo(result.get("message", ""))
    pages = result.get("pages") or []
    if not pages:
        return
    click.echo()
    width = max(len(p.get("route", "")) for p in pages)
    for page in pages:
        click.echo(f"  {page.get('route', ''):<{width}}  {page.get('screenId', '')}")


def print_projects(projects: list[dict[str, Any]]) -> None:
    """Print one project per line: name and title."""
    for project in projects:
        title = project.get("title") or "(untitled)"
        click.echo(f"{project.get('name', '?')}  {title}")

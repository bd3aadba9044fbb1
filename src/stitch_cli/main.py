"""CLI main entry point."""

import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from typing import Any

import click
from rich.markup import escape

from .config import CONFIG_KEYS, load_config, save_config, unset_config
from .formatters import (
    err_console,
    print_config_yaml,
    print_error,
    print_projects,
    print_site_result,
    print_tools_list,
    render_output,
)
from .pipeline import Outcome
from .projects import ProjectsHandler
from .remote import StitchMCPClient
from .shared.logging import configure_logging, verbosity_to_level
from .site import SiteCommandHandler, SiteCommandInput
from .tool import ToolCommandHandler, ToolCommandInput
from .view import ViewHandler, ViewInput

OUTPUT_FORMATS = ["json", "pretty", "raw"]


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write logs to a file")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON")
@click.pass_context
def cli(ctx: click.Context, verbose: int, log_file: str | None, json_logs: bool) -> None:
    """Stitch MCP command-line client."""
    ctx.ensure_object(dict)
    config = load_config()
    configure_logging(
        level=verbosity_to_level(verbose, default=config.log_level),
        log_file=log_file,
        json_output=json_logs,
    )
    ctx.obj["config"] = config


def _make_client(ctx: click.Context) -> StitchMCPClient:
    try:
        return StitchMCPClient.from_config(ctx.obj["config"])
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)


def _run(execute: Callable[[], Awaitable[Outcome]]) -> Any:
    """Run a handler to completion and return its data, exiting 1 on failure."""
    try:
        outcome = asyncio.run(execute())
    except Exception as e:
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)

    if not outcome.success:
        if outcome.error is not None:
            print_error(outcome.error)
        sys.exit(1)
    return outcome.data


@cli.command()
@click.argument("name", required=False)
@click.option("-s", "--schema", "show_schema", is_flag=True, help="Show the tool's argument schema")
@click.option("-d", "--data", help="Arguments as a JSON object (like curl -d)")
@click.option("-f", "--data-file", help="Arguments from a JSON/YAML file (@file.json)")
@click.option("-o", "--output", type=click.Choice(OUTPUT_FORMATS), help="Output format")
@click.pass_context
def tool(
    ctx: click.Context,
    name: str | None,
    show_schema: bool,
    data: str | None,
    data_file: str | None,
    output: str | None,
) -> None:
    """Invoke a tool, or list tools when NAME is omitted or "list"."""
    fmt = output or ctx.obj["config"].output_format
    input = ToolCommandInput(
        tool_name=name,
        show_schema=show_schema,
        data=data,
        data_file=data_file,
        output=fmt if fmt in OUTPUT_FORMATS else "pretty",
    )
    handler = ToolCommandHandler(_make_client(ctx))
    result = _run(lambda: handler.execute(input))

    if input.wants_list and input.output == "pretty":
        print_tools_list(result)
    else:
        click.echo(render_output(result, input.output))


@cli.command()
@click.option("--projects", is_flag=True, help="List projects")
@click.option("--name", help="Resource name (projects/ID or projects/ID/screens/ID)")
@click.option("--source-screen", help="Screen resource name to view")
@click.option("--project", help="Project ID")
@click.option("--screen", help="Screen ID (with --project)")
@click.option("-o", "--output", type=click.Choice(OUTPUT_FORMATS), default="pretty")
@click.pass_context
def view(
    ctx: click.Context,
    projects: bool,
    name: str | None,
    source_screen: str | None,
    project: str | None,
    screen: str | None,
    output: str,
) -> None:
    """View a project or screen resource."""
    input = ViewInput(
        projects=projects,
        name=name,
        source_screen=source_screen,
        project=project,
        screen=screen,
    )
    handler = ViewHandler(_make_client(ctx))
    result = _run(lambda: handler.execute(input))
    click.echo(render_output(result, output))


@cli.command()
@click.option("-p", "--project", "project_id", required=True, help="Project ID")
@click.option("-o", "--output", "output_dir", default=".", show_default=True, help="Output directory")
@click.option("-e", "--export", is_flag=True, help="Print the route config as JSON instead of building")
@click.option("--routes", "routes_file", help="Build from an exported (possibly edited) route config")
@click.pass_context
def site(
    ctx: click.Context,
    project_id: str,
    output_dir: str,
    export: bool,
    routes_file: str | None,
) -> None:
    """Build an Astro site from a project's screens."""
    input = SiteCommandInput(
        project_id=project_id,
        output_dir=output_dir,
        export=export,
        routes_file=routes_file,
    )
    handler = SiteCommandHandler(_make_client(ctx))
    result = _run(lambda: handler.execute(input))

    if export:
        click.echo(json.dumps(result, indent=2))
    else:
        print_site_result(result)


@cli.command()
@click.option("--filter", "query", help="Only projects whose title or name contains this")
@click.option("-o", "--output", type=click.Choice(["json", "pretty"]), default="pretty")
@click.pass_context
def projects(ctx: click.Context, query: str | None, output: str) -> None:
    """List projects."""
    handler = ProjectsHandler(_make_client(ctx))
    result = _run(lambda: handler.execute(query))

    if output == "json":
        click.echo(render_output(result, "json"))
    else:
        print_projects(result)


@cli.group()
def config() -> None:
    """Manage CLI configuration."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show effective configuration and where each value comes from."""
    cfg = ctx.obj["config"]
    print_config_yaml(cfg.to_display_dict(), {key: cfg.get_source(key) for key in CONFIG_KEYS})


@config.command("set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value."""
    try:
        save_config(key, value)
    except ValueError:
        click.echo(f"Error: Invalid value for {key}: {value}", err=True)
        sys.exit(1)
    click.echo(f"Set {key}")


@config.command("unset")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
def config_unset(key: str) -> None:
    """Remove a persisted configuration value."""
    if unset_config(key):
        click.echo(f"Unset {key}")
    else:
        click.echo(f"{key} is not set in the config file")


@cli.command()
def version() -> None:
    """Show version."""
    from . import __version__

    click.echo(f"stitch-mcp {__version__}")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()

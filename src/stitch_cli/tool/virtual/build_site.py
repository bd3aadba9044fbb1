"""build_site virtual tool: generate a site from explicit screen-to-route mappings."""

from typing import Any

from ...remote.protocol import RemoteClient
from ...site.generator import generate_site
from ...site.schemas import RouteEntry, invalid_route_reason, make_route_config
from ...site.syncer import ProjectSyncer
from ..models import VirtualTool

BUILD_SITE_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "projectId": {
            "type": "string",
            "description": "Required. The project ID to build a site from.",
        },
        "routes": {
            "type": "array",
            "description": "Required. Array of screen-to-route mappings.",
            "items": {
                "type": "object",
                "properties": {
                    "screenId": {
                        "type": "string",
                        "description": "The screen ID to use for this route.",
                    },
                    "route": {
                        "type": "string",
                        "description": 'The route path (e.g. "/" or "/about").',
                    },
                },
                "required": ["screenId", "route"],
            },
        },
        "outputDir": {
            "type": "string",
            "description": 'Optional. Output directory for the generated site. Defaults to ".".',
        },
    },
    "required": ["projectId", "routes"],
}


def validate_routes(routes: Any) -> list[RouteEntry]:
    """Check the raw routes argument and convert it to included entries.

    Raises:
        ValueError: If routes is not a non-empty list of {screenId, route}
            strings, or a route is not a page path
    """
    if not isinstance(routes, list):
        raise ValueError("routes must be an array")
    if not routes:
        raise ValueError("routes must be a non-empty array")

    entries = []
    for item in routes:
        if not isinstance(item, dict):
            raise ValueError("Each route entry must be an object")
        screen_id = item.get("screenId")
        route = item.get("route")
        if not screen_id or not isinstance(screen_id, str):
            raise ValueError('Each route entry must have a "screenId" string')
        if not route or not isinstance(route, str):
            raise ValueError('Each route entry must have a "route" string')
        reason = invalid_route_reason(route)
        if reason:
            raise ValueError(f"Invalid route path '{route}': {reason}")
        entries.append(RouteEntry(screen_id=screen_id, route=route))
    return entries


async def build_site(client: RemoteClient, args: dict[str, Any]) -> dict[str, Any]:
    project_id = args.get("projectId")
    if not project_id or not isinstance(project_id, str):
        raise ValueError('"projectId" must be a non-empty string')
    output_dir = args.get("outputDir") or "."

    # RouteConfigError on duplicate routes
    config = make_route_config(project_id, validate_routes(args.get("routes")))

    syncer = ProjectSyncer(client)
    screens = {screen.name: screen for screen in await syncer.fetch_manifest(project_id)}

    missing = [entry.screen_id for entry in config.routes if entry.screen_id not in screens]
    if missing:
        raise ValueError(f"Screen IDs not found in project: {', '.join(missing)}")

    html_content: dict[str, str] = {}
    errors: list[str] = []
    for entry in config.routes:
        url = screens[entry.screen_id].html_url
        if not url:
            errors.append(f"{entry.screen_id}: no HTML download URL")
            continue
        try:
            html_content[entry.screen_id] = await syncer.fetch_content(url)
        except Exception as e:
            errors.append(f"{entry.screen_id}: {e}")

    if errors:
        raise RuntimeError(f"Failed to fetch HTML for screens: {'; '.join(errors)}")

    generate_site(config, html_content, output_dir)

    pages = [
        {
            "screenId": entry.screen_id,
            "route": entry.route,
            "title": screens[entry.screen_id].title,
        }
        for entry in config.routes
    ]
    return {
        "success": True,
        "outputDir": output_dir,
        "pages": pages,
        "message": f"Site generated with {len(pages)} page(s) at {output_dir}",
    }


BUILD_SITE = VirtualTool(
    name="build_site",
    description=(
        "(Virtual) Generates an Astro site from a Stitch project "
        "by specifying screen-to-route mappings."
    ),
    input_schema=BUILD_SITE_INPUT_SCHEMA,
    execute=build_site,
)

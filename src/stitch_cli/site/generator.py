"""Astro site scaffolding from a validated route config."""

import json
from pathlib import Path

from ..shared.logging import get_logger
from .schemas import RouteConfig, RouteEntry

logger = get_logger(__name__)

PACKAGE_JSON = {
    "name": "stitch-site",
    "type": "module",
    "version": "0.0.1",
    "scripts": {
        "dev": "astro dev",
        "start": "astro dev",
        "build": "astro build",
        "preview": "astro preview",
        "astro": "astro",
    },
    "dependencies": {"astro": "^5.0.0"},
}

ASTRO_CONFIG = """import { defineConfig } from 'astro/config';
export default defineConfig({});
"""

LAYOUT = """---
interface Props {
\ttitle: string;
}

const { title } = Astro.props;
---

<!doctype html>
<html lang="en">
\t<head>
\t\t<meta charset="UTF-8" />
\t\t<meta name="viewport" content="width=device-width" />
\t\t<meta name="generator" content={Astro.generator} />
\t\t<title>{title}</title>
\t</head>
\t<body>
\t\t<slot />
\t</body>
</html>
"""


class SiteLayoutError(Exception):
    """Included routes do not map to distinct page files under src/pages."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def page_path(route: str) -> str:
    """Map a route to its page file, relative to src/pages."""
    if route == "/":
        return "index.astro"
    return f"{route.lstrip('/')}.astro"


def _page_targets(config: RouteConfig, pages_dir: Path) -> list[tuple[RouteEntry, Path]]:
    """Resolve each included entry's page file, checked before anything is written."""
    pages_root = pages_dir.resolve()
    targets: list[tuple[RouteEntry, Path]] = []
    owners: dict[Path, str] = {}
    for entry in config.included:
        target = pages_dir / page_path(entry.route)
        resolved = target.resolve()
        if not resolved.is_relative_to(pages_root):
            raise SiteLayoutError(f"Route {entry.route} resolves outside {pages_dir}")
        if resolved in owners:
            raise SiteLayoutError(
                f"Routes {owners[resolved]} and {entry.route} both map to {target}"
            )
        owners[resolved] = entry.route
        targets.append((entry, target))
    return targets


def generate_site(
    config: RouteConfig,
    html_content: dict[str, str],
    output_dir: str | Path = ".",
) -> list[Path]:
    """Write an Astro project with one page per included route.

    Args:
        config: Validated route config
        html_content: Screen id -> rendered HTML
        output_dir: Project root to write into

    Returns:
        Paths of the written page files

    Raises:
        SiteLayoutError: If a route would write outside src/pages or onto
            another route's page file
        OSError: If the output cannot be written
    """
    root = Path(output_dir)
    pages_dir = root / "src" / "pages"
    layouts_dir = root / "src" / "layouts"

    targets = _page_targets(config, pages_dir)
    for directory in (pages_dir, layouts_dir, root / "public" / "assets"):
        directory.mkdir(parents=True, exist_ok=True)

    (root / "package.json").write_text(json.dumps(PACKAGE_JSON, indent=2) + "\n")
    (root / "astro.config.mjs").write_text(ASTRO_CONFIG)
    (layouts_dir / "Layout.astro").write_text(LAYOUT)

    written: list[Path] = []
    for entry, target in targets:
        html = html_content.get(entry.screen_id)
        if not html:
            logger.warning("no HTML content for screen", screen_id=entry.screen_id)
            continue

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html)
        written.append(target)

    logger.info("site generated", output_dir=str(root), pages=len(written))
    return written

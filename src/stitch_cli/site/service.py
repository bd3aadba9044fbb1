"""Screen stacking and route derivation."""

import re
from collections.abc import Iterable

from .schemas import (
    RemoteScreen,
    RouteConfig,
    RouteEntry,
    ScreenStack,
    make_route_config,
    route_key,
)

ROOT_TITLES = ("home", "index", "landing")

COLLISION_WARNING = "Potential collision detected. Route was modified."
NO_HTML_WARNING = "No rendered HTML version available."
OBSOLETE_WARNING = "Superseded by a newer version of this screen."
ARTIFACT_WARNING = "Looks like an uploaded artifact, not a page."

_ARTIFACT_RE = re.compile(r"\.(png|jpg|jpeg)$", re.IGNORECASE)
_VERSION_RE = re.compile(r"v(\d+)$")


def slugify(text: str) -> str:
    """Convert a title to a URL path segment."""
    slug = str(text).lower()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w\-]+", "", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def is_artifact_title(title: str) -> bool:
    """Whether a title names an uploaded image or a captured localhost page."""
    return bool(_ARTIFACT_RE.search(title)) or title.startswith("localhost_")


def stack_screens(screens: Iterable[RemoteScreen]) -> list[ScreenStack]:
    """Group screens into stacks by trimmed title.

    The stack id is the last usable version (one with rendered HTML), or the
    last version when none is usable. Among titles ending in ``v<N>`` with
    the same base name, every stack but the highest version is obsolete.
    """
    groups: dict[str, list[RemoteScreen]] = {}
    for screen in screens:
        groups.setdefault(screen.title.strip(), []).append(screen)

    stacks: list[ScreenStack] = []
    for title, versions in groups.items():
        usable = [v for v in versions if v.html_url]
        best = usable[-1] if usable else versions[-1]
        stacks.append(
            ScreenStack(
                id=best.name,
                title=title,
                versions=versions,
                is_artifact=is_artifact_title(title),
            )
        )

    versioned: dict[str, list[tuple[int, ScreenStack]]] = {}
    for stack in stacks:
        match = _VERSION_RE.search(stack.title)
        if match:
            base_name = _VERSION_RE.sub("", stack.title).strip()
            versioned.setdefault(base_name, []).append((int(match.group(1)), stack))

    for entries in versioned.values():
        if len(entries) < 2:
            continue
        entries.sort(key=lambda entry: entry[0], reverse=True)
        for _, stack in entries[1:]:
            stack.is_obsolete = True

    return stacks


def _ignore_reason(stack: ScreenStack) -> str | None:
    if stack.latest is None:
        return NO_HTML_WARNING
    if stack.is_obsolete:
        return OBSOLETE_WARNING
    if stack.is_artifact:
        return ARTIFACT_WARNING
    return None


def _preferred_route(title: str) -> str:
    if title.strip().lower() in ROOT_TITLES:
        return "/"
    return "/" + slugify(title)


def _resolve_collision(preferred: str, title: str, used: set[str]) -> str:
    """Pick a free route; ``used`` holds page keys (see ``route_key``)."""
    route = preferred
    if route == "/":
        route = "/" + slugify(title)

    if route_key(route) in used:
        base = "/home" if route == "/" else route
        counter = 1
        while f"{base}-{counter}" in used:
            counter += 1
        route = f"{base}-{counter}"

    return route


def derive_routes(stacks: Iterable[ScreenStack]) -> list[RouteEntry]:
    """Derive one RouteEntry per stack, ordered by title."""
    entries: list[RouteEntry] = []
    used: set[str] = set()

    for stack in sorted(stacks, key=lambda s: s.title.lower()):
        reason = _ignore_reason(stack)
        route = _preferred_route(stack.title)
        warning = reason

        if route_key(route) in used:
            route = _resolve_collision(route, stack.title, used)
            warning = f"{reason} {COLLISION_WARNING}" if reason else COLLISION_WARNING

        used.add(route_key(route))
        entries.append(
            RouteEntry(
                screen_id=stack.id,
                route=route,
                status="ignored" if reason else "included",
                warning=warning,
            )
        )

    return entries


def build_route_config(project_id: str, stacks: Iterable[ScreenStack]) -> RouteConfig:
    """Build and validate the draft route config for a project.

    Raises:
        RouteConfigError: If the derived table is invalid
    """
    return make_route_config(project_id, derive_routes(stacks))

"""Site route schemas.

RouteConfig is the validated screen-to-route table. Among included entries,
routes must be pairwise unique; a config violating this is rejected whole.
"""

from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

DUPLICATE_ROUTES_MESSAGE = "Active routes must be unique. Duplicate routes found."

RouteStatus = Literal["included", "ignored"]


class DownloadRef(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    download_url: str | None = Field(default=None, alias="downloadUrl")


class RemoteScreen(BaseModel):
    """A screen as returned by the remote ``list_screens`` tool."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    title: str = ""
    html_code: DownloadRef | None = Field(default=None, alias="htmlCode")
    screenshot: DownloadRef | None = None

    @property
    def html_url(self) -> str | None:
        """Download URL of the rendered HTML, if any."""
        return self.html_code.download_url if self.html_code else None


class ScreenStack(BaseModel):
    """All versions of one screen, grouped by title."""

    id: str
    title: str
    versions: list[RemoteScreen] = Field(default_factory=list)
    is_artifact: bool = False
    is_obsolete: bool = False

    @property
    def latest(self) -> RemoteScreen | None:
        """Last usable version (one with rendered HTML)."""
        usable = [v for v in self.versions if v.html_url]
        return usable[-1] if usable else None


class RouteEntry(BaseModel):
    """One screen's inclusion decision and target path."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    screen_id: str = Field(alias="screenId", min_length=1)
    route: str
    status: RouteStatus = "included"
    warning: str | None = None

    @field_validator("route")
    @classmethod
    def _check_route_path(cls, value: str) -> str:
        reason = invalid_route_reason(value)
        if reason:
            raise PydanticCustomError(
                "invalid_route",
                "Invalid route path '{route}': {reason}",
                {"route": value, "reason": reason},
            )
        return value


def invalid_route_reason(route: str) -> str | None:
    """Why ``route`` is not a usable page path, or None when it is.

    A route is ``/`` or ``/`` followed by non-empty segments, none of
    which is ``.`` or ``..``.
    """
    if not route.startswith("/"):
        return "must start with '/'"
    if route == "/":
        return None
    for segment in route[1:].split("/"):
        if not segment:
            return "empty path segment"
        if segment in (".", ".."):
            return f"'{segment}' segment not allowed"
        if "\\" in segment:
            return "backslash not allowed"
    return None


def route_key(route: str) -> str:
    """Page identity of a route: ``/index`` and ``/a/index`` serve ``/`` and ``/a``."""
    key = route
    while key == "/index" or key.endswith("/index"):
        key = key[: -len("/index")]
    return key or "/"


def find_duplicate_routes(routes: list[RouteEntry]) -> list[str]:
    """Return route paths that resolve to a page already taken by an earlier included entry.

    Routes are compared by ``route_key``, so ``/`` and ``/index`` collide.
    """
    seen: set[str] = set()
    duplicates: list[str] = []
    for entry in routes:
        if entry.status != "included":
            continue
        key = route_key(entry.route)
        if key in seen and entry.route not in duplicates:
            duplicates.append(entry.route)
        seen.add(key)
    return duplicates


class RouteConfig(BaseModel):
    """Validated route table for one project."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_id: str = Field(alias="projectId", min_length=1)
    routes: list[RouteEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_routes(self) -> "RouteConfig":
        if find_duplicate_routes(self.routes):
            raise PydanticCustomError("duplicate_routes", DUPLICATE_ROUTES_MESSAGE)
        return self

    @property
    def included(self) -> list[RouteEntry]:
        """Entries that make it into the generated site."""
        return [r for r in self.routes if r.status == "included"]

    def to_export(self) -> dict[str, Any]:
        """Self-contained export document (camelCase keys, no empty warnings)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RouteConfigError(Exception):
    """Route configuration failed validation."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def _describe(error: ValidationError) -> str:
    for detail in error.errors():
        if detail["type"] in ("duplicate_routes", "invalid_route"):
            return detail["msg"]
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def parse_route_config(document: Any) -> RouteConfig:
    """Validate a route config document (e.g., a re-parsed export).

    Raises:
        RouteConfigError: With exactly DUPLICATE_ROUTES_MESSAGE for duplicate
            included routes, otherwise the first validation problem
    """
    try:
        return RouteConfig.model_validate(document)
    except ValidationError as e:
        raise RouteConfigError(_describe(e)) from e


def make_route_config(project_id: str, routes: list[RouteEntry]) -> RouteConfig:
    """Construct and validate a RouteConfig from entries."""
    try:
        return RouteConfig(project_id=project_id, routes=routes)
    except ValidationError as e:
        raise RouteConfigError(_describe(e)) from e

"""Site building: screen stacking, route config validation, export, generation."""

from .handler import SiteCommandHandler
from .schemas import (
    DUPLICATE_ROUTES_MESSAGE,
    RemoteScreen,
    RouteConfig,
    RouteConfigError,
    RouteEntry,
    ScreenStack,
    parse_route_config,
)
from .service import build_route_config, slugify, stack_screens
from .models import SiteCommandInput

__all__ = [
    "DUPLICATE_ROUTES_MESSAGE",
    "RemoteScreen",
    "RouteConfig",
    "RouteConfigError",
    "RouteEntry",
    "ScreenStack",
    "SiteCommandHandler",
    "SiteCommandInput",
    "build_route_config",
    "parse_route_config",
    "slugify",
    "stack_screens",
]

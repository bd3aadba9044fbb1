"""Locally implemented tools that take precedence over remote ones."""

from ..models import VirtualTool
from .build_site import BUILD_SITE
from .screens import GET_SCREEN_CODE, GET_SCREEN_IMAGE

DEFAULT_VIRTUAL_TOOLS: tuple[VirtualTool, ...] = (
    GET_SCREEN_CODE,
    GET_SCREEN_IMAGE,
    BUILD_SITE,
)

__all__ = [
    "BUILD_SITE",
    "DEFAULT_VIRTUAL_TOOLS",
    "GET_SCREEN_CODE",
    "GET_SCREEN_IMAGE",
]

"""The view command: read a project or screen resource."""

from .handler import ViewHandler, decode_contents, resource_uri
from .models import NO_SELECTOR_MESSAGE, ViewInput

__all__ = [
    "NO_SELECTOR_MESSAGE",
    "ViewHandler",
    "ViewInput",
    "decode_contents",
    "resource_uri",
]

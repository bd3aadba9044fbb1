from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..pipeline import ExecutionContext
from ..remote.protocol import RemoteClient
from .models import ToolCommandInput, VirtualTool


@dataclass
class ToolContext(ExecutionContext):
    # Immutable
    input: ToolCommandInput = field(kw_only=True)
    client: RemoteClient = field(kw_only=True)
    virtual_tools: Sequence[VirtualTool] = field(kw_only=True, default=())
    # Set by steps
    parsed_args: dict[str, Any] | None = None

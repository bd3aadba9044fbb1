from dataclasses import dataclass, field

from ..pipeline import ExecutionContext
from ..remote.protocol import RemoteClient
from .schemas import RemoteScreen, RouteConfig
from .models import SiteCommandInput
from .syncer import ProjectSyncer


@dataclass
class SiteContext(ExecutionContext):
    # Immutable
    input: SiteCommandInput = field(kw_only=True)
    client: RemoteClient = field(kw_only=True)
    syncer: ProjectSyncer = field(kw_only=True)
    # Set by steps
    screens: list[RemoteScreen] | None = None
    config: RouteConfig | None = None
    html_content: dict[str, str] | None = None

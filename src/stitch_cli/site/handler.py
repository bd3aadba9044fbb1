"""Site command handler."""

from ..pipeline import Outcome, Step, run_steps
from ..remote.protocol import RemoteClient
from ..shared.logging import get_logger
from .context import SiteContext
from .models import SiteCommandInput
from .steps import (
    DraftRoutesStep,
    ExportStep,
    FetchHtmlStep,
    FetchScreensStep,
    GenerateSiteStep,
    LoadRoutesStep,
)
from .syncer import ProjectSyncer

logger = get_logger(__name__)


class SiteCommandHandler:
    """Builds a site (or exports its route config) from a project's screens.

    The handler owns the client for the duration of ``execute`` and closes
    it on every exit path.
    """

    def __init__(self, client: RemoteClient):
        self.client = client
        self.steps: list[Step[SiteContext]] = [
            FetchScreensStep(),
            DraftRoutesStep(),
            LoadRoutesStep(),
            ExportStep(),
            FetchHtmlStep(),
            GenerateSiteStep(),
        ]

    async def execute(self, input: SiteCommandInput) -> Outcome:
        context = SiteContext(
            input=input,
            client=self.client,
            syncer=ProjectSyncer(self.client),
        )
        try:
            await run_steps(self.steps, context)
        finally:
            try:
                await self.client.close()
            except Exception as e:
                logger.debug("ignoring client close failure", error=str(e))

        return context.outcome

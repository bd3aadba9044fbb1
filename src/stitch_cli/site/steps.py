"""Steps of the site command pipeline.

FetchScreens -> DraftRoutes | LoadRoutes -> Export | (FetchHtml -> GenerateSite)
"""

from ..pipeline import ErrorCode, Outcome, Step, require
from ..shared.logging import get_logger
from ..utils import load_document
from .context import SiteContext
from .generator import SiteLayoutError, generate_site
from .schemas import RouteConfigError, parse_route_config
from .service import build_route_config, stack_screens

logger = get_logger(__name__)


class FetchScreensStep(Step[SiteContext]):
    id = "fetch-screens"
    name = "Fetch project screens"

    def should_run(self, context: SiteContext) -> bool:
        return context.screens is None

    async def run(self, context: SiteContext) -> None:
        project_id = context.input.project_id
        try:
            context.screens = await context.syncer.fetch_manifest(project_id)
        except Exception as e:
            context.finish(
                Outcome.fail(ErrorCode.FETCH_FAILED, f"Failed to fetch screens for {project_id}: {e}")
            )
            return
        logger.info("screens fetched", project_id=project_id, count=len(context.screens))


class DraftRoutesStep(Step[SiteContext]):
    id = "draft-routes"
    name = "Derive routes from screens"

    def should_run(self, context: SiteContext) -> bool:
        return (
            context.screens is not None
            and context.config is None
            and not context.input.routes_file
        )

    async def run(self, context: SiteContext) -> None:
        stacks = stack_screens(require(context.screens, "screens"))
        try:
            context.config = build_route_config(context.input.project_id, stacks)
        except RouteConfigError as e:
            context.finish(Outcome.fail(ErrorCode.INVALID_ROUTES, e.message))


class LoadRoutesStep(Step[SiteContext]):
    id = "load-routes"
    name = "Load exported route config"

    def should_run(self, context: SiteContext) -> bool:
        return (
            context.screens is not None
            and context.config is None
            and bool(context.input.routes_file)
        )

    async def run(self, context: SiteContext) -> None:
        screens = require(context.screens, "screens")
        path = require(context.input.routes_file, "routes file")

        try:
            document = load_document(path)
        except (OSError, ValueError) as e:
            context.finish(Outcome.fail(ErrorCode.INVALID_ARGS, f"Cannot read routes file {path}: {e}"))
            return

        try:
            config = parse_route_config(document)
        except RouteConfigError as e:
            context.finish(Outcome.fail(ErrorCode.INVALID_ROUTES, e.message))
            return

        if config.project_id != context.input.project_id:
            context.finish(
                Outcome.fail(
                    ErrorCode.INVALID_ROUTES,
                    f"Routes file is for project {config.project_id}, not {context.input.project_id}",
                )
            )
            return

        known = {screen.name for screen in screens}
        missing = [r.screen_id for r in config.included if r.screen_id not in known]
        if missing:
            context.finish(
                Outcome.fail(
                    ErrorCode.INVALID_ROUTES,
                    f"Screen IDs not found in project: {', '.join(missing)}",
                )
            )
            return

        context.config = config


class ExportStep(Step[SiteContext]):
    id = "export"
    name = "Export route config"

    def should_run(self, context: SiteContext) -> bool:
        return context.input.export and context.config is not None

    async def run(self, context: SiteContext) -> None:
        context.finish(Outcome.ok(require(context.config, "route config").to_export()))


class FetchHtmlStep(Step[SiteContext]):
    id = "fetch-html"
    name = "Download screen HTML"

    def should_run(self, context: SiteContext) -> bool:
        return (
            not context.input.export
            and context.config is not None
            and context.html_content is None
        )

    async def run(self, context: SiteContext) -> None:
        config = require(context.config, "route config")
        screens = require(context.screens, "screens")
        included = config.included
        if not included:
            context.finish(
                Outcome.fail(
                    ErrorCode.NO_SCREENS_FOUND,
                    f"No screens with HTML to build for project {context.input.project_id}",
                )
            )
            return

        urls = {screen.name: screen.html_url for screen in screens if screen.html_url}
        html_content: dict[str, str] = {}
        errors: list[str] = []

        for entry in included:
            url = urls.get(entry.screen_id)
            if not url:
                errors.append(f"{entry.screen_id}: no HTML download URL")
                continue
            try:
                html_content[entry.screen_id] = await context.syncer.fetch_content(url)
            except Exception as e:
                errors.append(f"{entry.screen_id}: {e}")

        if errors:
            context.finish(
                Outcome.fail(
                    ErrorCode.FETCH_FAILED,
                    f"Failed to fetch HTML for screens: {'; '.join(errors)}",
                )
            )
            return

        context.html_content = html_content


class GenerateSiteStep(Step[SiteContext]):
    id = "generate-site"
    name = "Generate site"

    def should_run(self, context: SiteContext) -> bool:
        return context.html_content is not None

    async def run(self, context: SiteContext) -> None:
        config = require(context.config, "route config")
        html_content = require(context.html_content, "HTML content")
        output_dir = context.input.output_dir
        try:
            written = generate_site(config, html_content, output_dir)
        except SiteLayoutError as e:
            context.finish(Outcome.fail(ErrorCode.INVALID_ROUTES, e.message))
            return
        except OSError as e:
            context.finish(Outcome.fail(ErrorCode.GENERATE_FAILED, f"Failed to write site: {e}"))
            return

        pages = [
            {"screenId": entry.screen_id, "route": entry.route}
            for entry in config.included
        ]
        context.finish(
            Outcome.ok(
                {
                    "outputDir": output_dir,
                    "pages": pages,
                    "files": [str(p) for p in written],
                    "message": f"Site generated with {len(pages)} page(s) at {output_dir}",
                }
            )
        )

"""Input contract of the view command."""

from pydantic import BaseModel, ConfigDict, Field


class ViewInput(BaseModel):
    """Selects one resource to read. Selectors are tried in field order."""

    model_config = ConfigDict(populate_by_name=True)

    projects: bool = False
    name: str | None = None
    source_screen: str | None = Field(default=None, alias="sourceScreen")
    project: str | None = None
    screen: str | None = None


NO_SELECTOR_MESSAGE = (
    "No valid view arguments provided. "
    "Use --projects, --name, --source-screen, or --project."
)

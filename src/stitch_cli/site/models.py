"""Input contract of the site command."""

from pydantic import BaseModel, ConfigDict, Field


class SiteCommandInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId", min_length=1)
    output_dir: str = Field(default=".", alias="outputDir")
    export: bool = False
    # Previously exported route config to build from instead of the draft
    routes_file: str | None = Field(default=None, alias="routesFile")

"""Unit tests for ViewHandler and ProjectsHandler."""

import pytest

from stitch_cli.pipeline import ErrorCode
from stitch_cli.projects import ProjectsHandler, filter_projects
from stitch_cli.view import (
    NO_SELECTOR_MESSAGE,
    ViewHandler,
    ViewInput,
    decode_contents,
    resource_uri,
)


class TestViewHandler:
    @pytest.mark.asyncio
    async def test_no_selector_is_invalid_args(self, mock_client):
        outcome = await ViewHandler(mock_client).execute(ViewInput())

        assert outcome.success is False
        assert outcome.error.code == ErrorCode.INVALID_ARGS
        assert outcome.error.message == NO_SELECTOR_MESSAGE
        mock_client.read_resource.assert_not_called()
        mock_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_projects_calls_list_projects(self, mock_client):
        mock_client.call_tool.return_value = {"projects": [{"name": "projects/1"}]}

        outcome = await ViewHandler(mock_client).execute(ViewInput(projects=True, project="p"))

        assert outcome.data == {"projects": [{"name": "projects/1"}]}
        mock_client.call_tool.assert_awaited_once_with("list_projects", {})
        mock_client.read_resource.assert_not_called()

    @pytest.mark.parametrize(
        "fields, message",
        [
            ({"name": "screens/9"}, "Invalid resource name format: screens/9"),
            ({"name": "projects/1/screens"}, "Invalid resource name format: projects/1/screens"),
            ({"name": "projects//screens/9"}, "Invalid resource name format: projects//screens/9"),
            ({"source_screen": "projects/1"}, "Invalid source screen format: projects/1"),
        ],
    )
    @pytest.mark.asyncio
    async def test_malformed_resource_name(self, mock_client, fields, message):
        outcome = await ViewHandler(mock_client).execute(ViewInput(**fields))

        assert outcome.success is False
        assert outcome.error.code == ErrorCode.INVALID_ARGS
        assert outcome.error.message == message
        mock_client.read_resource.assert_not_called()
        mock_client.close.assert_awaited_once()

    def test_resource_uri_accepts_screen_name(self):
        assert resource_uri(ViewInput(name="projects/1/screens/9")) == "projects/1/screens/9"

    @pytest.mark.parametrize(
        "fields, uri",
        [
            ({"name": "projects/1"}, "projects/1"),
            ({"name": "projects/1", "project": "2"}, "projects/1"),
            ({"source_screen": "projects/1/screens/9"}, "projects/1/screens/9"),
            ({"project": "1", "screen": "9"}, "projects/1/screens/9"),
            ({"project": "1"}, "projects/1"),
        ],
    )
    @pytest.mark.asyncio
    async def test_selector_priority(self, mock_client, fields, uri):
        await ViewHandler(mock_client).execute(ViewInput(**fields))

        mock_client.read_resource.assert_awaited_once_with(uri)

    @pytest.mark.asyncio
    async def test_decodes_json_text(self, mock_client):
        mock_client.read_resource.return_value = {
            "contents": [
                {"uri": "projects/1", "text": '{"title": "Demo"}'},
                {"uri": "projects/1/notes", "text": "plain text"},
            ]
        }

        outcome = await ViewHandler(mock_client).execute(ViewInput(project="1"))

        assert outcome.data == {
            "contents": [
                {"uri": "projects/1", "data": {"title": "Demo"}},
                {"uri": "projects/1/notes", "text": "plain text"},
            ]
        }

    @pytest.mark.asyncio
    async def test_fetch_failure(self, mock_client):
        mock_client.read_resource.side_effect = Exception("Resource not found")

        outcome = await ViewHandler(mock_client).execute(ViewInput(project="1"))

        assert outcome.error.code == ErrorCode.FETCH_FAILED
        assert outcome.error.message == "Resource not found"
        mock_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_failure_is_swallowed(self, mock_client):
        mock_client.read_resource.return_value = {"ok": True}
        mock_client.close.side_effect = Exception("close failed")

        outcome = await ViewHandler(mock_client).execute(ViewInput(project="1"))

        assert outcome.success is True
        assert outcome.data == {"ok": True}

    def test_decode_contents_passes_through_other_shapes(self):
        assert decode_contents(None) is None
        assert decode_contents({"name": "x"}) == {"name": "x"}
        assert decode_contents(["a"]) == ["a"]


class TestProjectsHandler:
    @pytest.mark.asyncio
    async def test_lists_projects(self, mock_client):
        mock_client.call_tool.return_value = {
            "projects": [{"name": "projects/1", "title": "Shop"}]
        }

        outcome = await ProjectsHandler(mock_client).execute()

        assert outcome.data == [{"name": "projects/1", "title": "Shop"}]
        mock_client.call_tool.assert_awaited_once_with("list_projects", {})
        mock_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_projects(self, mock_client):
        mock_client.call_tool.return_value = {}

        outcome = await ProjectsHandler(mock_client).execute()

        assert outcome.error.code == ErrorCode.NO_PROJECTS_FOUND

    @pytest.mark.asyncio
    async def test_filter_without_match(self, mock_client):
        mock_client.call_tool.return_value = {"projects": [{"name": "projects/1", "title": "Shop"}]}

        outcome = await ProjectsHandler(mock_client).execute("blog")

        assert outcome.error.code == ErrorCode.NO_PROJECTS_FOUND
        assert "blog" in outcome.error.message

    @pytest.mark.asyncio
    async def test_fetch_failure(self, mock_client):
        mock_client.call_tool.side_effect = Exception("unauthorized")

        outcome = await ProjectsHandler(mock_client).execute()

        assert outcome.error.code == ErrorCode.FETCH_FAILED
        mock_client.close.assert_awaited_once()

    @pytest.mark.parametrize(
        "response",
        ["no projects yet", {"projects": "none"}, [{"name": "projects/1"}, "projects/2"]],
    )
    @pytest.mark.asyncio
    async def test_unexpected_payload(self, mock_client, response):
        mock_client.call_tool.return_value = response

        outcome = await ProjectsHandler(mock_client).execute()

        assert outcome.success is False
        assert outcome.error.code == ErrorCode.FETCH_FAILED
        assert outcome.error.message == "Unexpected list_projects response"

    @pytest.mark.asyncio
    async def test_close_failure_is_swallowed(self, mock_client):
        mock_client.call_tool.return_value = [{"name": "projects/1", "title": "Shop"}]
        mock_client.close.side_effect = Exception("close failed")

        outcome = await ProjectsHandler(mock_client).execute()

        assert outcome.success is True
        assert outcome.data == [{"name": "projects/1", "title": "Shop"}]
        mock_client.close.assert_awaited_once()

    def test_filter_is_case_insensitive(self):
        projects = [
            {"name": "projects/1", "title": "Coffee Shop"},
            {"name": "projects/shop-2", "title": "Blog"},
            {"name": "projects/3", "title": "Portfolio"},
        ]
        assert filter_projects(projects, "SHOP") == projects[:2]
        assert filter_projects(projects, None) == projects

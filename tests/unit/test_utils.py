"""Unit tests for argument and document loading helpers."""

import pytest

from stitch_cli.utils import load_document, parse_tool_args


class TestParseToolArgs:
    def test_no_args(self):
        assert parse_tool_args(None, None) == {}

    def test_data_wins_over_file(self, tmp_path):
        args_file = tmp_path / "args.json"
        args_file.write_text('{"from": "file"}')

        assert parse_tool_args('{"from": "data"}', str(args_file)) == {"from": "data"}

    def test_json_file_with_at_prefix(self, tmp_path):
        args_file = tmp_path / "args.json"
        args_file.write_text('{"projectId": "p1"}')

        assert parse_tool_args(None, f"@{args_file}") == {"projectId": "p1"}

    def test_empty_yaml_file(self, tmp_path):
        args_file = tmp_path / "args.yml"
        args_file.write_text("")

        assert parse_tool_args(None, str(args_file)) == {}

    def test_invalid_json(self):
        with pytest.raises(ValueError, match="Invalid JSON data"):
            parse_tool_args("{nope", None)

    def test_non_object(self):
        with pytest.raises(ValueError, match="must be a JSON object"):
            parse_tool_args("[1, 2]", None)


class TestLoadDocument:
    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("a: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_document(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_document(tmp_path / "missing.json")

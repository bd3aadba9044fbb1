"""Unit tests for stitch_cli.shared.logging module."""

import json
import logging

import pytest

from stitch_cli.shared.logging import (
    REDACTED,
    configure_logging,
    get_logger,
    redact_secrets,
    verbosity_to_level,
)


@pytest.mark.cli_unit
class TestVerbosity:
    @pytest.mark.parametrize(
        "verbose, level",
        [(0, "warning"), (1, "info"), (2, "debug"), (5, "debug")],
    )
    def test_verbosity_to_level(self, verbose, level):
        assert verbosity_to_level(verbose) == level

    def test_default_used_without_flags(self):
        assert verbosity_to_level(0, default="error") == "error"


@pytest.mark.cli_unit
class TestConfigureLogging:
    def test_writes_to_log_file(self, tmp_path):
        log_file = tmp_path / "stitch.log"
        configure_logging(level="info", log_file=log_file)

        logging.getLogger("stitch_cli.test").info("hello from stdlib")

        assert "hello from stdlib" in log_file.read_text()

    def test_quiets_httpx(self, tmp_path):
        configure_logging(level="debug", log_file=tmp_path / "stitch.log")

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_get_logger(self):
        assert get_logger(__name__) is not None

    def test_creates_log_file_directory(self, tmp_path):
        log_file = tmp_path / "logs" / "stitch.log"
        configure_logging(level="info", log_file=log_file)

        logging.getLogger("stitch_cli.test").info("hello")

        assert log_file.exists()

    def test_json_lines_are_redacted(self, tmp_path):
        log_file = tmp_path / "stitch.log"
        configure_logging(level="info", log_file=log_file, json_output=True)

        structlog_logger = get_logger("stitch_cli.test.json")
        structlog_logger.info("connecting", api_key="AIza-secret", base_url="https://x/mcp")

        line = log_file.read_text().strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "connecting"
        assert event["api_key"] == REDACTED
        assert event["base_url"] == "https://x/mcp"
        assert "AIza-secret" not in log_file.read_text()


@pytest.mark.cli_unit
class TestRedactSecrets:
    def test_masks_credential_fields(self):
        event = redact_secrets(
            None,
            "info",
            {"event": "request", "access_token": "ya29.token", "api_key": None, "tool": "x"},
        )

        assert event == {"event": "request", "access_token": REDACTED, "api_key": None, "tool": "x"}

    def test_masks_credential_headers(self):
        event = redact_secrets(
            None,
            "debug",
            {
                "event": "request",
                "headers": {
                    "Authorization": "Bearer ya29.token",
                    "X-Goog-Api-Key": "AIza-secret",
                    "Accept": "application/json",
                },
            },
        )

        assert event["headers"] == {
            "Authorization": REDACTED,
            "X-Goog-Api-Key": REDACTED,
            "Accept": "application/json",
        }

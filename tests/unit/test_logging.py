"""Unit tests for logging setup: nothing may reach stdout, which carries the protocol."""

from __future__ import annotations

import json
import logging
from typing import Iterator

import pytest
import structlog

from your_spotify_mcp.utils.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_json_events_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("INFO", json_output=True)
        get_logger("tests").info("tool_call_completed", tool="get_top_tracks")
        out, err = capsys.readouterr()
        assert out == ""
        event = json.loads(err.strip().splitlines()[-1])
        assert event["event"] == "tool_call_completed"
        assert event["tool"] == "get_top_tracks"
        assert event["level"] == "info"

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("WARNING", json_output=True)
        get_logger("tests").info("hidden")
        assert capsys.readouterr().err == ""

    def test_stdlib_loggers_rerouted_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("INFO")
        logging.getLogger("mcp.server").warning("from the sdk")
        out, err = capsys.readouterr()
        assert out == ""
        assert "from the sdk" in err

    def test_httpx_request_logging_silenced(self) -> None:
        configure_logging("DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING

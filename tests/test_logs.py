"""Tests for logging setup."""

from __future__ import annotations

import json
import logging

import pytest
from rich.logging import RichHandler

from filetrack_core.logs import JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str, *args) -> logging.LogRecord:
    return logging.LogRecord("filetrack_core.test", logging.WARNING, __file__, 1, msg, args, None)


class TestJsonFormatter:
    def test_one_object_per_record(self):
        line = JsonFormatter().format(_record("Evicted %s", "/work/a.txt"))
        data = json.loads(line)

        assert data["level"] == "warning"
        assert data["logger"] == "filetrack_core.test"
        assert data["message"] == "Evicted /work/a.txt"
        assert data["ts"].endswith("+00:00")


class TestConfigureLogging:
    def test_text_format_uses_rich(self, restore_root_logger):
        configure_logging("debug", "text")

        assert restore_root_logger.level == logging.DEBUG
        assert isinstance(restore_root_logger.handlers[0], RichHandler)

    def test_json_format(self, restore_root_logger):
        configure_logging("warn", "json")

        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)

"""Tests for logging configuration."""

import json
import logging
import sys

from render_mcp.config import LoggingConfig
from render_mcp.logging_config import JSONFormatter, TextFormatter, configure_logging


class TestJSONFormatter:
    def test_formats_as_json(self):
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hello %s", args=("world",), exc_info=None,
        )
        output = formatter.format(record)
        parsed = json.loads(output)
        assert parsed["message"] == "hello world"
        assert parsed["level"] == "INFO"
        assert "timestamp" in parsed

    def test_includes_extra_fields(self):
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="test", args=(), exc_info=None,
        )
        record.tool = "deploy_service"  # type: ignore
        record.status_code = 201  # type: ignore
        record.is_error = False  # type: ignore
        output = formatter.format(record)
        parsed = json.loads(output)
        assert parsed["tool"] == "deploy_service"
        assert parsed["status_code"] == 201
        assert parsed["is_error"] is False


class TestTextFormatter:
    def _record(self, **extra):
        record = logging.LogRecord(
            name="render_mcp.tools.dispatcher", level=logging.INFO, pathname="", lineno=0,
            msg="Tool call finished", args=(), exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_plain_line_without_context(self):
        output = TextFormatter().format(self._record())
        assert output.endswith("[render_mcp.tools.dispatcher] Tool call finished")

    def test_appends_context(self):
        output = TextFormatter().format(self._record(tool="get_service", is_error=False))
        assert output.endswith("Tool call finished (tool=get_service is_error=False)")

    def test_ignores_unknown_extras(self):
        output = TextFormatter().format(self._record(request_id="abc"))
        assert "request_id" not in output


class TestConfigureLogging:
    def test_json_format(self):
        configure_logging(LoggingConfig(level="DEBUG", format="json"))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, JSONFormatter) for h in root.handlers)

    def test_text_format(self):
        configure_logging(LoggingConfig(level="WARNING", format="text"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(h.formatter, TextFormatter) for h in root.handlers)

    def test_logs_to_stderr_only(self):
        configure_logging(LoggingConfig())
        streams = [getattr(h, "stream", None) for h in logging.getLogger().handlers]
        assert streams == [sys.stderr]

    def test_suppresses_noisy_loggers(self):
        configure_logging(LoggingConfig())
        assert logging.getLogger("urllib3").level >= logging.WARNING
        assert logging.getLogger("mcp").level >= logging.WARNING

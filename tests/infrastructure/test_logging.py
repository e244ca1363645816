"""Tests for logging configuration."""

import json
import logging

from stackgate.infrastructure.logging import (
    JSONFormatter,
    configure_logging,
    level_from_name,
)


class TestLevelFromName:
    def test_known_names(self):
        assert level_from_name("info") == logging.INFO
        assert level_from_name("DEBUG") == logging.DEBUG

    def test_unknown_or_empty(self):
        assert level_from_name("chatty") == logging.WARNING
        assert level_from_name(None, default=logging.ERROR) == logging.ERROR


class TestJSONFormatter:
    def test_includes_extra_fields(self):
        record = logging.LogRecord(
            "stackgate.test", logging.INFO, __file__, 1, "checked %s", ("svc",), None
        )
        record.stack = "svc-dev"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "checked svc"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "stackgate.test"
        assert entry["stack"] == "svc-dev"
        assert "args" not in entry


class TestConfigureLogging:
    def test_single_handler(self):
        configure_logging(logging.INFO)
        configure_logging(logging.DEBUG, json_format=True)

        logger = logging.getLogger("stackgate")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    def test_sdk_quiet_unless_debugging(self):
        configure_logging(logging.INFO)
        assert logging.getLogger("botocore").level == logging.WARNING

        configure_logging(logging.DEBUG)
        assert logging.getLogger("botocore").level == logging.DEBUG

        configure_logging(logging.WARNING)

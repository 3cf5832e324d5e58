"""Tests for log redaction."""

import logging

import pytest
import structlog

from contentful_slack.utils.logging import (
    _filter_sensitive,
    get_logger,
    request_log_context,
    setup_logging,
)


class TestFilterSensitive:
    def test_bearer_token_redacted(self):
        event = _filter_sensitive(None, "info", {"headers": "Authorization: Bearer CFPAT-abc123"})
        assert "CFPAT-abc123" not in event["headers"]
        assert "REDACTED" in event["headers"]

    def test_token_assignment_redacted(self):
        event = _filter_sensitive(None, "info", {"detail": "cmaToken=secret-value"})
        assert "secret-value" not in event["detail"]

    def test_slack_hook_redacted(self):
        event = _filter_sensitive(
            None, "info", {"url": "https://hooks.slack.com/services/T000/B000/XXXXXXXX"}
        )
        assert event["url"] == "https://hooks.slack.com/services/***REDACTED***"

    def test_plain_values_untouched(self):
        event = _filter_sensitive(None, "info", {"event": "webhook_received", "port": 5000})
        assert event == {"event": "webhook_received", "port": 5000}


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetup:
    def test_setup_and_log(self, capsys, restore_logging):
        setup_logging(level="INFO", json_output=True)
        get_logger("tests").info("webhook_received", entity_id="entry1")
        captured = capsys.readouterr()
        assert "webhook_received" in captured.err
        assert "entry1" in captured.err


class TestRequestLogContext:
    def test_binds_and_unbinds(self):
        with request_log_context(space_id="space1", entity_id="entry1"):
            bound = structlog.contextvars.get_contextvars()
            assert bound["space_id"] == "space1"
            assert bound["entity_id"] == "entry1"
        assert "space_id" not in structlog.contextvars.get_contextvars()

    def test_skips_none(self):
        with request_log_context(entity_id="entry1", topic=None):
            assert "topic" not in structlog.contextvars.get_contextvars()

"""
Tests for the logging module.

Tests verify:
- configure_logging renders JSON with service metadata and ECS field names
- DEBUG logs are suppressed at INFO level
- Settings supply defaults for level and service
- Bound context is added and removed again
- Handlers installed before configuration are kept
"""

import json
import logging

import pytest
import structlog
from structlog.contextvars import get_contextvars

from fallible.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)


@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    level = root.level
    clear_context()
    yield
    clear_context()
    structlog.reset_defaults()
    # basicConfig installs a plain StreamHandler; pytest's handlers are subclasses
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


def _json_lines(caplog) -> list[dict]:
    messages = [record.getMessage() for record in caplog.records]
    return [json.loads(m) for m in messages if m.startswith("{")]


class TestConfigureLogging:
    def test_json_output_has_ecs_fields(self, caplog):
        configure_logging(level="DEBUG", json_format=True, service="notes-sync")
        get_logger("json-test").info("event_happened", count=42)

        record = _json_lines(caplog)[-1]
        assert record["event"] == "event_happened"
        assert record["count"] == 42
        assert record["service.name"] == "notes-sync"
        assert record["log.level"] == "info"
        assert record["logger"] == "json-test"
        assert "@timestamp" in record

    def test_debug_suppressed_at_info(self, caplog):
        configure_logging(level="INFO", json_format=True)
        get_logger("level-test").debug("hidden")
        get_logger("level-test").info("shown")

        events = [r["event"] for r in _json_lines(caplog)]
        assert "shown" in events
        assert "hidden" not in events

    def test_defaults_from_settings(self, monkeypatch, caplog):
        monkeypatch.setenv("FALLIBLE_SERVICE", "from-env")
        monkeypatch.setenv("FALLIBLE_LOG_LEVEL", "WARNING")
        configure_logging(json_format=True)
        get_logger("settings-test").info("dropped")
        get_logger("settings-test").warning("configured")

        records = _json_lines(caplog)
        assert [r["event"] for r in records] == ["configured"]
        assert records[0]["service.name"] == "from-env"

    def test_without_timestamp(self, caplog):
        configure_logging(level="INFO", json_format=True, add_timestamp=False)
        get_logger("ts-test").info("no_time")

        assert "@timestamp" not in _json_lines(caplog)[-1]


class TestContext:
    def test_bind_and_unbind(self):
        bind_context(batch="nightly", attempt=1)
        assert get_contextvars() == {"batch": "nightly", "attempt": 1}

        unbind_context("batch")
        assert get_contextvars() == {"attempt": 1}

    def test_clear(self):
        bind_context(batch="nightly")
        clear_context()
        assert get_contextvars() == {}

    def test_log_context_manager(self):
        with LogContext(batch="nightly"):
            assert get_contextvars()["batch"] == "nightly"
        assert "batch" not in get_contextvars()

    async def _use_async_context(self):
        async with LogContext(batch="async"):
            return dict(get_contextvars())

    def test_async_log_context_manager(self):
        import asyncio

        inside = asyncio.run(self._use_async_context())
        assert inside == {"batch": "async"}

    def test_context_merged_into_events(self, caplog):
        configure_logging(level="INFO", json_format=True)
        with LogContext(batch="nightly"):
            get_logger("ctx-test").info("inside")

        assert _json_lines(caplog)[-1]["batch"] == "nightly"


class TestExistingHandlers:
    def test_application_handlers_are_kept(self):
        root = logging.getLogger()
        records: list[logging.LogRecord] = []

        class Collecting(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        handler = Collecting()
        root.addHandler(handler)
        try:
            configure_logging(level="INFO", json_format=True)
            get_logger("host-test").info("still_routed")

            assert handler in root.handlers
            assert json.loads(records[-1].getMessage())["event"] == "still_routed"
        finally:
            root.removeHandler(handler)

    def test_root_level_follows_configuration(self):
        configure_logging(level="WARNING", json_format=True)
        assert logging.getLogger().level == logging.WARNING

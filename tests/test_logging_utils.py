"""Tests for the centralized logging helpers."""

import json
import logging
import threading

import pytest

from common.logging_utils import (
    JsonFormatter,
    LoggingInitContext,
    Timer,
    extra_context,
    is_debug_enabled,
)


@pytest.fixture
def init_context():
    ctx = LoggingInitContext()
    root = logging.getLogger()
    level = root.level
    yield ctx
    ctx.reset()
    root.setLevel(level)


def test_extra_context_drops_none():
    assert extra_context(event="x", target=None, count=0) == {"event": "x", "count": 0}


def test_is_debug_enabled():
    logger = logging.getLogger("tests.logging.debug")
    logger.setLevel(logging.DEBUG)
    assert is_debug_enabled(logger)
    logger.setLevel(logging.INFO)
    assert not is_debug_enabled(logger)


def test_timer_measures():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0


def test_configure_installs_one_handler(init_context):
    root = logging.getLogger()
    before = len(root.handlers)
    first = init_context.configure(level="debug")
    second = init_context.configure(level="info")
    assert first is second
    assert len(root.handlers) == before + 1
    assert root.level == logging.INFO


def test_configure_concurrently_installs_one_handler(init_context):
    root = logging.getLogger()
    before = len(root.handlers)
    threads = [threading.Thread(target=init_context.configure) for _ in range(8)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()
    assert len(root.handlers) == before + 1


def test_configure_reads_environment(init_context, monkeypatch):
    monkeypatch.setenv("SKEVER_LOG_LEVEL", "error")
    monkeypatch.setenv("SKEVER_LOG_FORMAT", "json")
    handler = init_context.configure()
    assert logging.getLogger().level == logging.ERROR
    assert isinstance(handler.formatter, JsonFormatter)


def test_configure_unknown_level_falls_back(init_context):
    init_context.configure(level="chatty")
    assert logging.getLogger().level == logging.WARNING


def test_configure_force_replaces_handler(init_context):
    first = init_context.configure(fmt="human")
    second = init_context.configure(fmt="json", force=True)
    assert first is not second
    assert first not in logging.getLogger().handlers


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("resolver", logging.DEBUG, __file__, 1, "Resolved %s", ("1.2.3",), None)
    record.__dict__.update(extra_context(event="function_exit", target="1.2.3"))
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "Resolved 1.2.3"
    assert payload["event"] == "function_exit"
    assert payload["level"] == "DEBUG"


def test_resolver_debug_trace(caplog):
    from versioning.catalog import catalog_from_entries
    from versioning.models import VersionConstraint
    from versioning.resolvers import KubernetesVersionResolver

    c = catalog_from_entries([{"version": "1.25.0", "state": "supported"}])
    with caplog.at_level(logging.DEBUG, logger="versioning.resolvers.base"):
        KubernetesVersionResolver().resolve(c, VersionConstraint.unset())
    records = [r for r in caplog.records if getattr(r, "action", None) == "resolve"]
    assert records and records[0].target == "1.25.0"


def test_downgrade_guard_logs_info(caplog):
    from versioning.catalog import catalog_from_entries
    from versioning.parser import parse_constraint
    from versioning.resolvers import KubernetesVersionResolver

    c = catalog_from_entries([{"version": "1.25.0", "state": "supported"}])
    with caplog.at_level(logging.INFO, logger="versioning.resolvers.base"):
        KubernetesVersionResolver().resolve(c, parse_constraint("1.24"), "1.25.0")
    assert any(getattr(r, "action", None) == "downgrade_guard" for r in caplog.records)


def test_configure_logging_uses_process_context(monkeypatch, init_context):
    from common import logging_utils

    monkeypatch.setattr(logging_utils, "_INIT", init_context)
    handler = logging_utils.configure_logging(level="info")
    assert init_context.configured
    assert handler in logging.getLogger().handlers

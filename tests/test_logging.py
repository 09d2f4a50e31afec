"""AppLogger allow-list and JSON log entries."""

from __future__ import annotations

import io
import json
import logging
from typing import Iterator, Tuple

import pytest

from app.common.logging import (
    VERBOSE,
    AppLogger,
    JsonFormatter,
    TraceIdFilter,
    build_handlers,
    parse_log_levels,
)
from app.common.trace import trace_scope


@pytest.fixture
def json_logger() -> Iterator[Tuple[AppLogger, io.StringIO]]:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(TraceIdFilter())

    std = logging.getLogger("tests.json")
    std.setLevel(VERBOSE)
    std.propagate = False
    std.addHandler(handler)
    try:
        yield AppLogger(name="tests.json"), stream
    finally:
        std.removeHandler(handler)


def _entries(stream: io.StringIO) -> list:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


class TestParseLogLevels:
    def test_known_levels_kept_in_order(self) -> None:
        assert parse_log_levels("log, warn,foo") == ["log", "warn"]

    def test_empty(self) -> None:
        assert parse_log_levels("") == []
        assert parse_log_levels(None) == []


class TestAllowList:
    def test_defaults_to_all_levels(self) -> None:
        logger = AppLogger(name="tests.allow.default")
        assert logger.levels == ["log", "error", "warn", "debug", "verbose"]

    def test_disabled_levels_are_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(VERBOSE, logger="tests.allow")
        logger = AppLogger(levels=["error"], name="tests.allow")

        logger.log("info")
        logger.warn("warn")
        logger.debug("debug")
        logger.verbose("verbose")
        logger.error("boom")

        records = [r for r in caplog.records if r.name == "tests.allow"]
        assert [r.getMessage() for r in records] == ["boom"]
        assert records[0].levelno == logging.ERROR

    def test_set_log_levels_ignores_unknown(self) -> None:
        logger = AppLogger(name="tests.allow.set")
        logger.set_log_levels(["warn", "fatal"])
        assert logger.levels == ["warn"]
        assert logger.is_enabled("warn")
        assert not logger.is_enabled("log")

    def test_emit_unknown_level_uses_log(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(VERBOSE, logger="tests.emit")
        AppLogger(name="tests.emit").emit("nope", "hello")
        records = [r for r in caplog.records if r.name == "tests.emit"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO


class TestJsonFormatter:
    def test_entry_shape(self, json_logger) -> None:
        logger, stream = json_logger
        with trace_scope("rid-1"):
            logger.log("hello", "UsersController")

        (entry,) = _entries(stream)
        assert entry["level"] == "log"
        assert entry["rid"] == "rid-1"
        assert entry["context"] == "UsersController"
        assert entry["message"] == "hello"
        assert "trace" not in entry
        assert entry["timestamp"].endswith("Z")

    def test_error_carries_trace(self, json_logger) -> None:
        logger, stream = json_logger
        logger.error("failed", trace="Traceback ...")

        (entry,) = _entries(stream)
        assert entry["level"] == "error"
        assert entry["trace"] == "Traceback ..."
        assert entry["rid"] == "system"
        assert "context" not in entry

    def test_same_shape_for_every_level(self, json_logger) -> None:
        logger, stream = json_logger
        for name in ("log", "warn", "debug", "verbose"):
            logger.emit(name, name, "Ctx")

        entries = _entries(stream)
        assert [e["level"] for e in entries] == ["log", "warn", "debug", "verbose"]
        assert all(set(e) == {"timestamp", "level", "rid", "context", "message"} for e in entries)

    def test_exc_info_becomes_trace(self, json_logger) -> None:
        _, stream = json_logger
        std = logging.getLogger("tests.json")
        try:
            raise RuntimeError("kaboom")
        except RuntimeError:
            std.exception("unexpected")

        (entry,) = _entries(stream)
        assert entry["context"] == "tests.json"
        assert "RuntimeError: kaboom" in entry["trace"]


class TestBuildHandlers:
    def test_streams_split_by_severity(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        std = logging.getLogger("tests.streams")
        std.setLevel(VERBOSE)
        std.propagate = False
        handlers = build_handlers(out, err)
        for h in handlers:
            std.addHandler(h)
        try:
            std.info("to stdout")
            std.debug("debug to stdout")
            std.warning("to stderr")
            std.error("also stderr")
        finally:
            for h in handlers:
                std.removeHandler(h)

        assert [json.loads(x)["message"] for x in out.getvalue().splitlines()] == ["to stdout", "debug to stdout"]
        assert [json.loads(x)["message"] for x in err.getvalue().splitlines()] == ["to stderr", "also stderr"]

"""
Tests for structured relocation logging.
"""

import json
import logging

import pytest

from segmove.monitoring.logging import (
    MoveContextFilter,
    MoveJsonFormatter,
    MoveLogger,
    segment_context,
    setup_move_logging,
)


def make_record(message="hello", **extra):
    record = logging.LogRecord("segmove.test", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def restore_segmove_logger():
    root = logging.getLogger("segmove")
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    segment_context.set({})


class TestMoveJsonFormatter:
    """Tests for MoveJsonFormatter"""

    def test_basic_fields(self):
        entry = json.loads(MoveJsonFormatter().format(make_record()))

        assert entry["message"] == "hello"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "segmove.test"
        assert "segment_id" not in entry

    def test_includes_segment_context(self):
        token = segment_context.set({"segment_id": "seg-1", "source": "a/k", "target": "b/k"})
        try:
            entry = json.loads(MoveJsonFormatter().format(make_record()))
        finally:
            segment_context.reset(token)

        assert entry["segment_id"] == "seg-1"
        assert entry["source"] == "a/k"
        assert entry["target"] == "b/k"

    def test_record_extras(self):
        record = make_record(outcome="relocated", duration_ms=12.5, error_type="")

        entry = json.loads(MoveJsonFormatter().format(record))

        assert entry["outcome"] == "relocated"
        assert entry["duration_ms"] == 12.5
        assert "error_type" not in entry


class TestMoveContextFilter:
    def test_defaults_without_context(self):
        record = make_record()

        assert MoveContextFilter().filter(record) is True
        assert record.segment_id == "-"

    def test_explicit_extra_wins(self):
        segment_context.set({"segment_id": "ctx"})
        record = make_record(segment_id="explicit")

        MoveContextFilter().filter(record)

        assert record.segment_id == "explicit"


class TestMoveLogger:
    """Tests for MoveLogger"""

    def test_context_set_and_cleared(self):
        move_logger = MoveLogger("segmove.test.context")

        token = move_logger.set_segment_context("seg-1", "a/k", "b/k")
        assert segment_context.get()["segment_id"] == "seg-1"

        move_logger.clear_segment_context(token)
        assert segment_context.get() == {}

    def test_context_filter_added_once(self):
        MoveLogger("segmove.test.filters")
        MoveLogger("segmove.test.filters")
        setup_move_logging(include_console=False)

        filters = logging.getLogger("segmove.test.filters").filters
        assert sum(isinstance(f, MoveContextFilter) for f in filters) == 1

    def test_events(self, caplog):
        move_logger = MoveLogger("segmove.test.events")

        with caplog.at_level(logging.INFO, logger="segmove.test.events"):
            move_logger.move_started("seg-1", "a/k", "b/k")
            move_logger.duplicate_detected("seg-1", "a/k", "b/k")
            move_logger.delete_failed("seg-1", "a/k", RuntimeError("denied"))
            move_logger.move_failed("seg-1", "a/k", "b/k", ValueError("bad"))
            move_logger.move_completed("seg-1", "a/k", "b/k", "relocated", 3.0)

        levels = [record.levelname for record in caplog.records]
        assert levels == ["INFO", "WARNING", "WARNING", "ERROR", "INFO"]
        failed = caplog.records[3]
        assert failed.error_type == "ValueError"
        assert failed.error_message == "bad"
        assert caplog.records[4].outcome == "relocated"


class TestSetupMoveLogging:
    def test_json_console_handler(self):
        move_logger = setup_move_logging(log_level="debug", json_format=True)

        root = logging.getLogger("segmove")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, MoveJsonFormatter)
        assert isinstance(move_logger, MoveLogger)

    def test_without_console(self):
        setup_move_logging(include_console=False)

        assert logging.getLogger("segmove").handlers == []

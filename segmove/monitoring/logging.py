"""
Structured logging for segment relocation

Every log line emitted while a move is in flight carries the segment id and
the source/target coordinates, so moves of many segments running
concurrently can be told apart in aggregated logs.
"""

import json
import logging
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

# Context of the move currently executing in this task
segment_context: ContextVar[dict[str, Any]] = ContextVar("segment_context", default={})


class MoveJsonFormatter(logging.Formatter):
    """
    JSON formatter for relocation logs with structured fields
    """

    _EXTRA_FIELDS = (
        "segment_id",
        "source",
        "target",
        "outcome",
        "duration_ms",
        "error_type",
        "error_message",
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""
        log_entry = self._build_base_entry(record)
        self._add_segment_context(log_entry)
        self._add_record_extras(log_entry, record)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)

    def _build_base_entry(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

    def _add_segment_context(self, log_entry: dict[str, Any]) -> None:
        context = segment_context.get({})
        if context:
            log_entry.update(
                {
                    "segment_id": context.get("segment_id"),
                    "source": context.get("source"),
                    "target": context.get("target"),
                }
            )

    def _add_record_extras(self, log_entry: dict[str, Any], record: logging.LogRecord) -> None:
        for field in self._EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None and value != "":
                log_entry[field] = value


class MoveContextFilter(logging.Filter):
    """
    Logging filter that adds the current move context to log records
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = segment_context.get({})

        record.segment_id = getattr(record, "segment_id", None) or context.get(
            "segment_id", "-"
        )
        record.source = getattr(record, "source", None) or context.get("source", "")
        record.target = getattr(record, "target", None) or context.get("target", "")

        return True


class MoveLogger:
    """
    Relocation-aware logger with automatic context propagation
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)
        if not any(isinstance(f, MoveContextFilter) for f in self.logger.filters):
            self.logger.addFilter(MoveContextFilter())

    def set_segment_context(self, segment_id: str, source: str, target: str):
        """Set move context for the current task; returns a token for reset"""
        return segment_context.set(
            {"segment_id": segment_id, "source": source, "target": target}
        )

    def clear_segment_context(self, token=None) -> None:
        if token is not None:
            segment_context.reset(token)
        else:
            segment_context.set({})

    def move_started(self, segment_id: str, source: str, target: str) -> None:
        self.logger.info(
            f"Move started: {source} -> {target}",
            extra={"segment_id": segment_id, "source": source, "target": target},
        )

    def move_completed(
        self,
        segment_id: str,
        source: str,
        target: str,
        outcome: str,
        duration_ms: float,
    ) -> None:
        self.logger.info(
            f"Move finished: {segment_id} - Outcome: {outcome}",
            extra={
                "segment_id": segment_id,
                "source": source,
                "target": target,
                "outcome": outcome,
                "duration_ms": duration_ms,
            },
        )

    def duplicate_detected(self, segment_id: str, source: str, target: str) -> None:
        self.logger.warning(
            f"Segment object exists at both {source} and {target}; leaving both in place",
            extra={"segment_id": segment_id, "source": source, "target": target},
        )

    def delete_failed(self, segment_id: str, source: str, error: Exception) -> None:
        """Log a failed source delete - non-fatal, the object leaks"""
        self.logger.warning(
            f"Failed to delete source object {source} after copy: {error!s}",
            extra={
                "segment_id": segment_id,
                "source": source,
                "error_type": type(error).__name__,
                "error_message": str(error),
            },
        )

    def move_failed(self, segment_id: str | None, source: str, target: str, error: Exception) -> None:
        self.logger.error(
            f"Move failed: {source} -> {target} - {error!s}",
            extra={
                "segment_id": segment_id,
                "source": source,
                "target": target,
                "error_type": type(error).__name__,
                "error_message": str(error),
            },
        )


def setup_move_logging(
    log_level: str = "INFO", json_format: bool = True, include_console: bool = True
) -> MoveLogger:
    """
    Set up structured logging for the segmove namespace

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use JSON formatting for structured logs
        include_console: Include console handler

    Returns:
        Configured MoveLogger instance
    """
    root_logger = logging.getLogger("segmove")
    root_logger.setLevel(getattr(logging, log_level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if include_console:
        console_handler = logging.StreamHandler()
        console_handler.addFilter(MoveContextFilter())

        if json_format:
            console_handler.setFormatter(MoveJsonFormatter())
        else:
            console_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - [%(segment_id)s] - %(message)s"
                )
            )

        root_logger.addHandler(console_handler)

    return MoveLogger("segmove.relocation")

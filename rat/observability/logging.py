"""
Structured Logging

JSON-structured logging with context propagation.

Design decisions:
- Structured JSON output
- stderr only: stdout carries the MCP stdio transport
- Process-wide handlers set once by configure_logging()
- Context enrichment via contextvars
"""

import contextvars
import json
import sys
import traceback
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, TextIO


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


@dataclass
class LogRecord:
    """A structured log record."""

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    logger_name: str = "rat"

    # Structured data
    data: dict[str, Any] = field(default_factory=dict)

    # Error info
    error: str | None = None
    error_type: str | None = None
    stack_trace: str | None = None

    # Request context
    request_id: str | None = None
    tool: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result = {
            "timestamp": self.timestamp.isoformat(),
            "level": LogLevel(self.level).name,
            "logger": self.logger_name,
            "message": self.message,
        }

        if self.data:
            result["data"] = self.data

        if self.error:
            result["error"] = {
                "message": self.error,
                "type": self.error_type,
                "stack_trace": self.stack_trace,
            }

        if self.request_id:
            result["request_id"] = self.request_id
        if self.tool:
            result["tool"] = self.tool

        return result

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), default=str)


class LogHandler:
    """Base class for log handlers."""

    def __init__(self, level: LogLevel = LogLevel.DEBUG):
        self.level = level

    def should_handle(self, level: LogLevel) -> bool:
        """Check if this handler should process a log at this level."""
        return level >= self.level

    def handle(self, record: LogRecord) -> None:
        """Handle a log record."""
        pass


class ConsoleHandler(LogHandler):
    """Outputs logs to stderr."""

    def __init__(
        self,
        level: LogLevel = LogLevel.DEBUG,
        stream: TextIO | None = None,
        json_output: bool = True,
    ):
        super().__init__(level)
        self.stream = stream
        self.json_output = json_output

    def handle(self, record: LogRecord) -> None:
        if not self.should_handle(record.level):
            return

        if self.json_output:
            output = record.to_json()
        else:
            # Human-readable format
            output = (
                f"[{record.timestamp.strftime('%Y-%m-%d %H:%M:%S')}] "
                f"{LogLevel(record.level).name:8s} [{record.logger_name}] {record.message}"
            )
            if record.data:
                output += f" | {record.data}"
            if record.error:
                output += f" | ERROR: {record.error}"

        # Resolved per call so a redirected sys.stderr is honoured
        print(output, file=self.stream or sys.stderr)


class FileHandler(LogHandler):
    """Appends JSON logs to a file."""

    def __init__(
        self,
        filename: str,
        level: LogLevel = LogLevel.DEBUG,
    ):
        super().__init__(level)
        self.filename = filename
        self._file = None

    def handle(self, record: LogRecord) -> None:
        if not self.should_handle(record.level):
            return

        if self._file is None:
            self._file = open(self.filename, "a", encoding="utf-8")

        self._file.write(record.to_json() + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file:
            self._file.close()
            self._file = None


class BufferHandler(LogHandler):
    """Buffers logs in memory for testing."""

    def __init__(self, level: LogLevel = LogLevel.DEBUG, max_records: int = 1000):
        super().__init__(level)
        self.records: list[LogRecord] = []
        self._max_records = max_records

    def handle(self, record: LogRecord) -> None:
        if not self.should_handle(record.level):
            return

        self.records.append(record)

        if len(self.records) > self._max_records:
            self.records = self.records[-self._max_records :]

    def messages(self) -> list[str]:
        return [record.message for record in self.records]

    def clear(self) -> None:
        self.records.clear()


# Context variables for log enrichment
_log_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "log_context", default={}
)


@dataclass
class _LoggingConfig:
    level: LogLevel = LogLevel.INFO
    handlers: list[LogHandler] = field(default_factory=lambda: [ConsoleHandler()])


_config = _LoggingConfig()


class StructuredLogger:
    """
    Main structured logging interface.

    Loggers created without explicit level/handlers follow the
    process-wide configuration, so configure_logging() also affects
    module-level loggers created at import time.
    """

    def __init__(
        self,
        name: str = "rat",
        level: LogLevel | None = None,
        handlers: list[LogHandler] | None = None,
    ):
        self.name = name
        self._level = level
        self._handlers = handlers

    @property
    def level(self) -> LogLevel:
        return self._level if self._level is not None else _config.level

    @property
    def handlers(self) -> list[LogHandler]:
        return self._handlers if self._handlers is not None else _config.handlers

    def _log(
        self,
        level: LogLevel,
        message: str,
        data: dict[str, Any] | None = None,
        error: BaseException | None = None,
        **extra: Any,
    ) -> None:
        """Internal log method."""
        if level < self.level:
            return

        context = _log_context.get()

        record = LogRecord(
            level=level,
            message=message,
            logger_name=self.name,
            data={**(data or {}), **extra},
            request_id=context.get("request_id"),
            tool=context.get("tool"),
        )

        if error:
            record.error = str(error)
            record.error_type = type(error).__name__
            record.stack_trace = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )

        for handler in self.handlers:
            try:
                handler.handle(record)
            except Exception:
                pass  # Don't let logging errors affect main flow

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log at DEBUG level."""
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log at INFO level."""
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log at WARNING level."""
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, error: BaseException | None = None, **kwargs: Any) -> None:
        """Log at ERROR level."""
        self._log(LogLevel.ERROR, message, error=error, **kwargs)

    def critical(self, message: str, error: BaseException | None = None, **kwargs: Any) -> None:
        """Log at CRITICAL level."""
        self._log(LogLevel.CRITICAL, message, error=error, **kwargs)

    @staticmethod
    @contextmanager
    def context(**kwargs: Any):
        """
        Context manager for adding context to logs.

        Usage:
            with logger.context(request_id="123", tool="generate_response"):
                logger.info("Handling call")
        """
        current = _log_context.get()
        token = _log_context.set({**current, **kwargs})

        try:
            yield
        finally:
            _log_context.reset(token)


def get_logger(name: str = "rat") -> StructuredLogger:
    """Get a logger bound to the process-wide configuration."""
    return StructuredLogger(name=name)


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    json_output: bool = True,
    log_file: str | None = None,
    handlers: list[LogHandler] | None = None,
) -> StructuredLogger:
    """
    Configure process-wide handlers and return the root logger.

    Passing `handlers` replaces the console/file defaults entirely.
    """
    if isinstance(level, str):
        level = LogLevel[level.upper()]

    for handler in _config.handlers:
        if isinstance(handler, FileHandler):
            handler.close()

    if handlers is None:
        handlers = [ConsoleHandler(level=level, json_output=json_output)]
        if log_file:
            handlers.append(FileHandler(log_file, level=level))

    _config.level = level
    _config.handlers = handlers

    return StructuredLogger()

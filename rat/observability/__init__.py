"""
Observability Module

Structured logging for the RAT server.
"""

from rat.observability.logging import (
    BufferHandler,
    ConsoleHandler,
    FileHandler,
    LogLevel,
    StructuredLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "BufferHandler",
    "ConsoleHandler",
    "FileHandler",
    "LogLevel",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]

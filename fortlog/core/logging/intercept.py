"""Route other logging front-ends (stdlib ``logging``, loguru) into fortlog."""

from __future__ import annotations

import logging
from typing import Any

from loguru import logger as _loguru_logger

from fortlog.core.attributes.values import KeyVal, attr, text
from fortlog.core.levels import Level
from fortlog.core.logging.context import current_context
from fortlog.core.logging.renderer import log_unconditional


def level_from_std(levelno: int) -> Level:
    """Map a stdlib/loguru numeric level to ours (they share the same scale)."""
    if levelno >= logging.CRITICAL:
        return Level.CRITICAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARNING
    if levelno >= logging.INFO:
        return Level.INFO
    if levelno > logging.DEBUG:
        return Level.VERBOSE
    return Level.DEBUG


def _forward(lvl: Level, msg: str, attrs: list[KeyVal]) -> None:
    """Log a bridged record in the current output format (color, JSON or text).

    Records are not forced to JSON, they follow ``config.json`` and color mode.
    """
    ctx = current_context()
    if not ctx.log(lvl):
        return
    # Location would be this module, not the logging call site.
    log_unconditional(ctx, lvl, msg.strip(), attrs, file_and_line=False)


class InterceptHandler(logging.Handler):
    """stdlib logging handler writing records through fortlog.

    Records are logged at ``level`` when given, otherwise at the level
    matching their own, with a ``src`` attribute.
    """

    def __init__(self, source: str = "std", level: Level | None = None) -> None:
        super().__init__(logging.NOTSET)
        self.source = source
        self.fixed_level = level

    def emit(self, record: logging.LogRecord) -> None:
        lvl = self.fixed_level if self.fixed_level is not None else level_from_std(record.levelno)
        attrs = [text("src", self.source)]
        if record.exc_info and record.exc_info[1] is not None:
            attrs.append(attr("error", record.exc_info[1]))
        _forward(lvl, record.getMessage(), attrs)


def new_std_logger(source: str, level: Level | None = None) -> logging.Logger:
    """A stdlib logger writing through fortlog with the given ``src`` attribute.

    Handy to hand to libraries that take a ``logging.Logger``.
    """
    std = logging.getLogger(f"fortlog.{source}")
    std.handlers.clear()
    std.addHandler(InterceptHandler(source, level))
    std.setLevel(logging.DEBUG)
    std.propagate = False
    return std


def intercept_standard_logger(level: Level | None = None) -> InterceptHandler:
    """Send everything logged through the root stdlib logger to fortlog (``src="std"``)."""
    handler = InterceptHandler("std", level)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return handler


class LoguruSink:
    """loguru sink writing records through fortlog; ``extra`` values become attributes."""

    def __init__(self, source: str = "loguru", level: Level | None = None) -> None:
        self.source = source
        self.fixed_level = level

    def __call__(self, message: Any) -> None:
        record = message.record
        lvl = self.fixed_level if self.fixed_level is not None else level_from_std(record["level"].no)
        attrs = [text("src", self.source)]
        attrs.extend(attr(k, v) for k, v in record["extra"].items())
        exception = record["exception"]
        if exception is not None and exception.value is not None:
            attrs.append(attr("error", exception.value))
        _forward(lvl, record["message"], attrs)


def intercept_loguru(level: Level | None = None, source: str = "loguru") -> int:
    """Replace loguru's handlers with one forwarding to fortlog; returns the handler id."""
    _loguru_logger.remove()
    return _loguru_logger.add(LoguruSink(source, level), level=0, format="{message}")


__all__ = [
    "InterceptHandler",
    "LoguruSink",
    "intercept_loguru",
    "intercept_standard_logger",
    "level_from_std",
    "new_std_logger",
]

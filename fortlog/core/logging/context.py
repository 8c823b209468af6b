"""Process wide logging state: threshold, configuration, output and color mode."""

from __future__ import annotations

import io
import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import IO, Any

from fortlog.core.config.settings import LogConfig, default_config
from fortlog.core.exceptions import ConfigurationError
from fortlog.core.levels import Level
from fortlog.core.logging.console import ANSIColors, is_terminal, level_colors, no_colors
from fortlog.core.monitoring.metrics import get_logger_metrics


class _AtomicLevel:
    """Threshold storage: stores are serialized, loads are a single attribute read."""

    __slots__ = ("_lock", "_value")

    def __init__(self, value: Level) -> None:
        self._lock = threading.Lock()
        self._value = value

    def load(self) -> Level:
        return self._value

    def store(self, value: Level) -> None:
        with self._lock:
            self._value = value


class LoggerContext:
    """Everything the logger needs on each call.

    One context is current for the whole process (see :func:`current_context`);
    tests can install a fresh one with :func:`use_context` instead of mutating
    the default.
    """

    def __init__(
        self,
        config: LogConfig | None = None,
        *,
        output: IO[Any] | None = None,
        level: Level = Level.INFO,
        unit_id: Callable[[], int] = threading.get_native_id,
        full_json: bool = True,
    ) -> None:
        self.config = config or default_config()
        self._level = _AtomicLevel(level)
        # None means whatever sys.stderr currently is.
        self._output = output
        self._write_lock = threading.Lock()
        self.unit_id = unit_id
        # Full (pydantic backed) attribute encoder vs the minimal hand written one.
        self.full_json = full_json
        self.ansi_colors = ANSIColors()
        self.colors = no_colors()
        self.level_to_color = level_colors(self.colors)
        self.color = False
        self.set_color_mode()

    # -- level

    def get_level(self) -> Level:
        return self._level.load()

    def store_level(self, lvl: Level) -> None:
        self._level.store(lvl)

    def log(self, lvl: Level) -> bool:
        """True if ``lvl`` is currently logged."""
        return lvl >= self._level.load()

    # -- output

    @property
    def output(self) -> IO[Any]:
        return self._output if self._output is not None else sys.stderr

    def set_output(self, output: IO[Any] | None) -> None:
        """Change the output (``None`` for ``sys.stderr``) and recompute color mode.

        Raises:
            ConfigurationError: ``output`` has no ``write`` method.
        """
        if output is not None and not callable(getattr(output, "write", None)):
            raise ConfigurationError(f"log output must be a writable stream, got {type(output).__name__}")
        self._output = output
        self.set_color_mode()

    def write(self, line: str) -> None:
        """Write one fully formatted line, atomically with respect to other writers."""
        out = self.output
        data: str | bytes = line
        if isinstance(out, (io.RawIOBase, io.BufferedIOBase)):
            data = line.encode("utf-8")
        # Plain writers without flush() are accepted.
        flush = getattr(out, "flush", None)
        with self._write_lock:
            try:
                out.write(data)
                if flush is not None:
                    flush()
            except Exception as exc:  # logging must never raise; nowhere to log this to
                get_logger_metrics().record_write_error(exc)

    # -- color

    def console_logging(self) -> bool:
        """True if the current output is a terminal."""
        return is_terminal(self.output)

    def color_mode(self) -> bool:
        """Whether color text mode should be used; prefer the cached :attr:`color`."""
        return self.config.force_color or (self.config.console_color and self.console_logging())

    def set_color_mode(self) -> None:
        """Recompute the cached color flag and color tables.

        Must be called after changing ``config.console_color``,
        ``config.force_color`` or :attr:`ansi_colors` (set_output() calls it).
        """
        color = self.color_mode()
        self.colors = self.ansi_colors.copy() if color else no_colors()
        self.level_to_color = level_colors(self.colors)
        self.color = color


_CURRENT: LoggerContext | None = None
_CURRENT_LOCK = threading.Lock()


def current_context() -> LoggerContext:
    """Return the process wide logging context, creating it on first use."""
    global _CURRENT
    ctx = _CURRENT
    if ctx is None:
        with _CURRENT_LOCK:
            if _CURRENT is None:
                _CURRENT = LoggerContext()
            ctx = _CURRENT
    return ctx


def set_context(ctx: LoggerContext) -> LoggerContext:
    """Install ``ctx`` as the current context and return the previous one."""
    global _CURRENT
    prev = current_context()
    _CURRENT = ctx
    return prev


@contextmanager
def use_context(ctx: LoggerContext | None = None) -> Iterator[LoggerContext]:
    """Temporarily install ``ctx`` (a fresh default context if omitted)."""
    ctx = ctx or LoggerContext()
    prev = set_context(ctx)
    try:
        yield ctx
    finally:
        set_context(prev)


__all__ = ["LoggerContext", "current_context", "set_context", "use_context"]

"""Leveled logging entry points.

Format strings use ``%`` style and are only expanded when the level is
enabled, so ``debugf("x=%s", expensive)`` costs a level check when debug is
off.

All public functions call into the renderer at the same stack depth so the
reported file:line is always the caller's.
"""

from __future__ import annotations

from typing import Any

from fortlog.core.attributes.values import KeyVal, attr
from fortlog.core.config.settings import client_tools_config
from fortlog.core.exceptions import FatalError
from fortlog.core.levels import INVALID_LEVEL, Level, validate_level
from fortlog.core.logging.context import current_context
from fortlog.core.logging.renderer import log_unconditional


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


def _logf(lvl: Level, fmt: str, args: tuple[Any, ...]) -> None:
    ctx = current_context()
    if not ctx.log(lvl):
        return
    # _logf <- public function <- user
    log_unconditional(ctx, lvl, _format(fmt, args), file_and_line=ctx.config.log_file_and_line, stacklevel=3)


# -- level management


def get_log_level() -> Level:
    """Return the current threshold."""
    return current_context().get_level()


def log(lvl: Level) -> bool:
    """True if a given level is currently logged."""
    return current_context().log(lvl)


is_enabled = log


def log_debug() -> bool:
    return current_context().log(Level.DEBUG)


def log_verbose() -> bool:
    return current_context().log(Level.VERBOSE)


def _set_log_level(lvl: int, log_change: bool) -> Level | int:
    ctx = current_context()
    prev = ctx.get_level()
    # _set_log_level <- set_log_level* <- user
    if lvl < Level.DEBUG:
        log_unconditional(
            ctx,
            Level.ERROR,
            f"set_log_level called with level {int(lvl)} lower than Debug!",
            file_and_line=ctx.config.log_file_and_line,
            stacklevel=3,
        )
        return INVALID_LEVEL
    if lvl > Level.CRITICAL:
        log_unconditional(
            ctx,
            Level.ERROR,
            f"set_log_level called with level {int(lvl)} higher than Critical!",
            file_and_line=ctx.config.log_file_and_line,
            stacklevel=3,
        )
        return INVALID_LEVEL
    new = Level(lvl)
    if new != prev:
        if log_change and ctx.log(Level.INFO):
            log_unconditional(
                ctx,
                Level.INFO,
                f"Log level is now {int(new)} {new} (was {int(prev)} {prev})",
                file_and_line=ctx.config.log_file_and_line,
                stacklevel=3,
            )
        ctx.store_level(new)
    return prev


def set_log_level(lvl: int) -> Level | int:
    """Set the threshold and return the previous one.

    Only DEBUG to CRITICAL are accepted; other values are logged as an error
    and ``INVALID_LEVEL`` is returned without changing anything. A change is
    logged at Info level.
    """
    return _set_log_level(lvl, True)


def set_log_level_quiet(lvl: int) -> Level | int:
    """Same as :func:`set_log_level` without logging the change itself."""
    return _set_log_level(lvl, False)


def set_log_level_str(name: str) -> Level | int:
    """Set the threshold from a level name.

    Raises:
        InvalidLevelError: unknown level name.
    """
    return _set_log_level(validate_level(name), True)


# -- output and modes


def set_output(output: Any) -> None:
    """Send output to ``output`` (any writable stream, ``None`` for stderr)."""
    current_context().set_output(output)


def set_color_mode() -> None:
    current_context().set_color_mode()


def color_mode() -> bool:
    return current_context().color_mode()


def console_logging() -> bool:
    return current_context().console_logging()


def set_defaults_for_client_tools() -> None:
    """Output without caller info, text (or color) and exit instead of raising on fatal.

    Better suited for command line tools than the server defaults.
    """
    ctx = current_context()
    client_tools_config(ctx.config)
    ctx.set_color_mode()


# -- format style entry points


def logf(lvl: Level, fmt: str, *args: Any) -> None:
    """Log at the given level. Unlike fatalf(), ``logf(Level.FATAL, ...)`` doesn't exit."""
    _logf(lvl, fmt, args)


def debugf(fmt: str, *args: Any) -> None:
    _logf(Level.DEBUG, fmt, args)


def logvf(fmt: str, *args: Any) -> None:
    """Log at Verbose level."""
    _logf(Level.VERBOSE, fmt, args)


def infof(fmt: str, *args: Any) -> None:
    _logf(Level.INFO, fmt, args)


def warnf(fmt: str, *args: Any) -> None:
    _logf(Level.WARNING, fmt, args)


def errf(fmt: str, *args: Any) -> None:
    _logf(Level.ERROR, fmt, args)


def critf(fmt: str, *args: Any) -> None:
    _logf(Level.CRITICAL, fmt, args)


def fatalf(fmt: str, *args: Any) -> None:
    """Log at Fatal level then raise :class:`FatalError` or call ``config.fatal_exit(1)``."""
    _logf(Level.FATAL, fmt, args)
    config = current_context().config
    if config.fatal_panics:
        raise FatalError()
    config.fatal_exit(1)


def ferrf(fmt: str, *args: Any) -> int:
    """Log at Fatal level and return 1, for ``sys.exit(main())`` style programs.

    Example::

        def main() -> int:
            if err:
                return log.ferrf("error: %s", err)
            return 0
    """
    _logf(Level.FATAL, fmt, args)
    return 1


def printf(fmt: str, *args: Any) -> None:
    """Always log, without level, caller information or prefix."""
    ctx = current_context()
    log_unconditional(ctx, Level.NO_LEVEL, _format(fmt, args), file_and_line=False)


# -- structured


def log_attrs(lvl: Level, msg: str, attrs: tuple[KeyVal, ...] | list[KeyVal], *, stacklevel: int = 1) -> None:
    """Structured logging for helpers: ``stacklevel`` 1 reports the caller of log_attrs."""
    ctx = current_context()
    if not ctx.log(lvl):
        return
    log_unconditional(ctx, lvl, msg, attrs, file_and_line=ctx.config.log_file_and_line, stacklevel=stacklevel + 1)


def s(lvl: Level, msg: str, *attrs: KeyVal, **kwattrs: Any) -> None:
    """Log ``msg`` with attributes.

    Attributes are :class:`KeyVal` (see ``attr()``, ``text()``...) and/or
    keyword arguments, output in call order.
    """
    ctx = current_context()
    if not ctx.log(lvl):
        return
    all_attrs: tuple[KeyVal, ...] | list[KeyVal] = attrs
    if kwattrs:
        all_attrs = [*attrs, *(attr(k, v) for k, v in kwattrs.items())]
    log_unconditional(ctx, lvl, msg, all_attrs, file_and_line=ctx.config.log_file_and_line, stacklevel=2)


class _LoggerShim:
    """printf() compatible object logging at Info level."""

    def printf(self, fmt: str, *args: Any) -> None:
        ctx = current_context()
        if not ctx.log(Level.INFO):
            return
        log_unconditional(
            ctx, Level.INFO, _format(fmt, args), file_and_line=ctx.config.log_file_and_line, stacklevel=2
        )


def printf_logger() -> _LoggerShim:
    """Object with a ``printf(fmt, *args)`` method, to pass to code expecting one."""
    return _LoggerShim()


__all__ = [
    "color_mode",
    "console_logging",
    "critf",
    "debugf",
    "errf",
    "fatalf",
    "ferrf",
    "get_log_level",
    "infof",
    "is_enabled",
    "log",
    "log_attrs",
    "log_debug",
    "log_verbose",
    "logf",
    "logvf",
    "printf",
    "printf_logger",
    "s",
    "set_color_mode",
    "set_defaults_for_client_tools",
    "set_log_level",
    "set_log_level_quiet",
    "set_log_level_str",
    "set_output",
    "warnf",
]

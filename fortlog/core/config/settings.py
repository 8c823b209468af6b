"""Logger configuration record."""

import sys
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass
class LogConfig:
    """Logger configuration.

    Fields are read directly on every log call, so a change takes effect on the
    next call. Changes are not synchronized with concurrent logging: mutate the
    configuration during setup, not while other threads are logging. Call
    ``set_color_mode()`` after changing ``console_color`` or ``force_color``.
    """

    # Separates the caller information from the message in text mode.
    log_prefix: str = "> "
    # Include the caller's file name and line number.
    log_file_and_line: bool = True
    # fatalf() raises FatalError (with a traceback) instead of calling fatal_exit.
    fatal_panics: bool = True
    fatal_exit: Callable[[int], object] = field(default=sys.exit, repr=False)
    # Structured JSON output instead of text (color mode takes precedence).
    json: bool = True
    no_timestamp: bool = False
    # Use color text mode when the output is a terminal.
    console_color: bool = True
    # Use color text mode even when the output isn't a terminal (e.g. CI logs).
    force_color: bool = False
    # Include the calling thread id ("r") in the output.
    thread_id: bool = True
    # HTTP helpers log a single entry per request instead of request + response.
    combine_request_and_response: bool = True


def default_config() -> LogConfig:
    """Defaults best suited for servers.

    Caller file and line are logged, a prefix separates them from the message,
    fatalf() raises, and output is JSON unless a console is detected.
    """
    return LogConfig()


def client_tools_config(config: LogConfig) -> LogConfig:
    """Switch ``config`` in place to defaults suited for command line tools."""
    config.log_prefix = " "
    config.log_file_and_line = False
    config.fatal_panics = False
    config.console_color = True
    config.json = False
    config.thread_id = False
    config.combine_request_and_response = False
    return config


__all__ = ["LogConfig", "client_tools_config", "default_config"]

"""Command line flag for the log level (argparse)."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import Any

from fortlog.core.exceptions import InvalidLevelError
from fortlog.core.levels import LEVEL_TO_STR, validate_level
from fortlog.core.logging.logger import get_log_level, set_log_level


class LevelFlag:
    """Flag value bound to the logger threshold.

    ``str()`` shows the current level, but only for instances created by
    :func:`logger_static_flag_setup` (``ours=True``); a generically built
    instance renders as ``""`` so help output doesn't show a bogus default.
    """

    def __init__(self, ours: bool = False) -> None:
        self.ours = ours

    def __str__(self) -> str:
        if not self.ours:
            return ""
        return str(get_log_level())

    def set(self, inp: str) -> None:
        """Validate ``inp`` (any case, spaces trimmed) and make it the threshold.

        Raises:
            InvalidLevelError: unknown level name.
        """
        set_log_level(validate_level(inp))


_FLAG = LevelFlag(ours=True)


class _LevelAction(argparse.Action):
    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | Sequence[Any] | None,
        option_string: str | None = None,
    ) -> None:
        try:
            _FLAG.set(str(values))
        except InvalidLevelError as exc:
            raise argparse.ArgumentError(self, exc.message) from exc
        setattr(namespace, self.dest, _FLAG)


def logger_static_flag_setup(parser: argparse.ArgumentParser, *names: str) -> None:
    """Add ``--loglevel`` (or ``--<name>`` for each of ``names``) to ``parser``.

    Setting the flag changes the log level right away; all the names share
    the same value. The help text shows the current level as the default.
    """
    for name in names or ("loglevel",):
        parser.add_argument(
            f"--{name}",
            action=_LevelAction,
            default=_FLAG,
            metavar="level",
            help=f"log level, one of {', '.join(LEVEL_TO_STR)} (default %(default)s)",
        )


__all__ = ["LevelFlag", "logger_static_flag_setup"]

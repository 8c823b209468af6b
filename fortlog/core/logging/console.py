"""ANSI color palette and console (terminal) detection."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, fields
from typing import IO, Any

from fortlog.core.levels import LEVEL_TO_TEXT, Level


@dataclass
class ANSIColors:
    """Color escape codes. Any field can be changed to customize the palette."""

    reset: str = "\033[0m"
    red: str = "\033[31m"
    green: str = "\033[32m"
    yellow: str = "\033[33m"
    blue: str = "\033[34m"
    purple: str = "\033[35m"
    cyan: str = "\033[36m"
    gray: str = "\033[37m"
    white: str = "\033[97m"
    bright_red: str = "\033[91m"
    dark_gray: str = "\033[90m"

    def copy(self) -> ANSIColors:
        return ANSIColors(**{f.name: getattr(self, f.name) for f in fields(self)})


def no_colors() -> ANSIColors:
    """Palette used when not in color mode: every code is empty."""
    return ANSIColors(**{f.name: "" for f in fields(ANSIColors)})


def level_colors(colors: ANSIColors) -> list[str]:
    """Per level color, indexed by ``Level`` (NO_LEVEL included)."""
    return [
        colors.gray,  # DEBUG
        colors.cyan,  # VERBOSE
        colors.green,  # INFO
        colors.yellow,  # WARNING
        colors.red,  # ERROR
        colors.purple,  # CRITICAL
        colors.bright_red,  # FATAL
        colors.green,  # NO_LEVEL
    ]


def color_level_to_str(colors: ANSIColors, level_to_color: list[str], lvl: Level) -> str:
    """Bracketed, colored 3 letter level tag (just the dark gray code for NO_LEVEL)."""
    if lvl == Level.NO_LEVEL:
        return colors.dark_gray
    return colors.dark_gray + "[" + level_to_color[lvl] + LEVEL_TO_TEXT[lvl] + colors.dark_gray + "]"


def is_terminal(stream: IO[Any] | Any) -> bool:
    """True if ``stream`` is backed by a character device (i.e. not redirected).

    Streams without a file descriptor (StringIO, custom writers...) are never
    considered terminals.
    """
    try:
        fd = stream.fileno()
        mode = os.fstat(fd).st_mode
    except (AttributeError, OSError, ValueError):
        # io.UnsupportedOperation is both an OSError and a ValueError.
        return False
    return stat.S_ISCHR(mode)


__all__ = [
    "ANSIColors",
    "color_level_to_str",
    "is_terminal",
    "level_colors",
    "no_colors",
]

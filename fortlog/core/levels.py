"""Log levels and the name/token tables derived from them."""

from __future__ import annotations

from enum import IntEnum

from fortlog.core.exceptions import InvalidLevelError


class Level(IntEnum):
    """Ordered log levels, ``DEBUG`` (0) to ``FATAL`` (6) plus ``NO_LEVEL``."""

    DEBUG = 0
    VERBOSE = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    FATAL = 6
    # Always emitted, without level decorations (printf style output).
    NO_LEVEL = 7

    def __str__(self) -> str:
        if self is Level.NO_LEVEL:
            return "NoLevel"
        return LEVEL_TO_STR[self]

    # IntEnum formats as the int otherwise.
    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


# Returned by set_log_level() when the requested level is out of range.
INVALID_LEVEL = -1

# Display names, also accepted (case insensitively) as level names.
LEVEL_TO_STR: list[str] = [
    "Debug",
    "Verbose",
    "Info",
    "Warning",
    "Error",
    "Critical",
    "Fatal",
]

# JSON level values, quotes included so they can be written as is.
# Short names matching what log viewers like grafana understand.
LEVEL_TO_JSON: list[str] = [
    '"dbug"',
    '"trace"',
    '"info"',
    '"warn"',
    '"err"',
    '"crit"',
    '"fatal"',
    '"info"',  # NO_LEVEL
]

# Bracketed tags used in color mode.
LEVEL_TO_TEXT: list[str] = [
    "DBG",
    "VRB",
    "INF",
    "WRN",
    "ERR",
    "CRI",
    "FTL",
]

_LEVEL_BY_NAME: dict[str, Level] = {name.lower(): Level(i) for i, name in enumerate(LEVEL_TO_STR)}

# Reverse of LEVEL_TO_JSON without NO_LEVEL, so "info" maps back to INFO.
JSON_STRING_LEVEL_TO_LEVEL: dict[str, Level] = {
    token.strip('"'): Level(i) for i, token in enumerate(LEVEL_TO_JSON[: Level.FATAL + 1])
}


def validate_level(name: str) -> Level:
    """Return the level for ``name`` (any case, surrounding spaces ignored).

    Raises:
        InvalidLevelError: if ``name`` isn't one of ``LEVEL_TO_STR``.
    """

    lvl = _LEVEL_BY_NAME.get(name.strip().lower())
    if lvl is None:
        raise InvalidLevelError(name, LEVEL_TO_STR)
    return lvl


def level_by_name(name: str) -> Level:
    """Lenient variant of :func:`validate_level`, unknown names map to ``DEBUG``."""

    return _LEVEL_BY_NAME.get(name.strip().lower(), Level.DEBUG)


__all__ = [
    "INVALID_LEVEL",
    "JSON_STRING_LEVEL_TO_LEVEL",
    "LEVEL_TO_JSON",
    "LEVEL_TO_STR",
    "LEVEL_TO_TEXT",
    "Level",
    "level_by_name",
    "validate_level",
]

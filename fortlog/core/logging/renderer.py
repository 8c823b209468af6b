"""Formats one log line (color, JSON or plain text) and writes it.

Callers are responsible for the level check: everything here runs only for
lines that will be output. Formatting happens outside of any lock, only the
final write is serialized.
"""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from fortlog.core.attributes.encoders import quote
from fortlog.core.levels import LEVEL_TO_JSON, LEVEL_TO_STR, Level
from fortlog.core.logging.console import color_level_to_str
from fortlog.core.logging.context import LoggerContext
from fortlog.core.logging.entry import micros_to_ts_str

if TYPE_CHECKING:
    from fortlog.core.attributes.values import KeyVal


def caller(stacklevel: int) -> tuple[str, int]:
    """Basename and line number of the frame ``stacklevel`` levels above our caller."""
    frame = sys._getframe(stacklevel + 1)
    return os.path.basename(frame.f_code.co_filename), frame.f_lineno


def _json_timestamp(ctx: LoggerContext) -> str:
    if ctx.config.no_timestamp:
        return ""
    return '"ts":' + micros_to_ts_str(time.time_ns() // 1000) + ","


def _json_thread_id(ctx: LoggerContext) -> str:
    if not ctx.config.thread_id:
        return ""
    return f'"r":{ctx.unit_id()},'


def _color_timestamp(ctx: LoggerContext) -> str:
    if ctx.config.no_timestamp:
        return ""
    now = datetime.now()
    return f"{ctx.colors.dark_gray}{now:%H:%M:%S}.{now.microsecond // 1000:03d} "


def _color_thread_id(ctx: LoggerContext) -> str:
    if not ctx.config.thread_id:
        return ""
    return f"{ctx.colors.gray}r{ctx.unit_id()} "


def _attributes(ctx: LoggerContext, lvl: Level, attrs: Sequence[KeyVal]) -> str:
    if not attrs:
        return ""
    if ctx.color:
        c = ctx.colors
        lvl_color = ctx.level_to_color[lvl]
        return "".join(
            f"{c.reset}, {c.blue}{a.key}{c.reset}={lvl_color}{a.value}" for a in attrs
        )
    if ctx.config.json:
        return "".join(f",{quote(a.key)}:{a.value}" for a in attrs)
    return "".join(f", {a.key}={a.value}" for a in attrs)


def log_unconditional(
    ctx: LoggerContext,
    lvl: Level,
    msg: str,
    attrs: Sequence[KeyVal] = (),
    *,
    file_and_line: bool,
    stacklevel: int = 1,
) -> None:
    """Render and write one line, without checking the level.

    ``stacklevel`` is the number of frames between this function and the
    code whose location should be reported (1 for our direct caller).
    """
    config = ctx.config
    prefix = config.log_prefix or " "
    lvl_letter = ""
    if lvl == Level.NO_LEVEL:
        # Plain text keeps a single space so a line is never blank.
        prefix = "" if ctx.color else " "
    else:
        lvl_letter = LEVEL_TO_STR[lvl][0]
    location = ""
    file = ""
    line = 0
    if file_and_line:
        file, line = caller(stacklevel)
    extra = _attributes(ctx, lvl, attrs)
    if ctx.color:
        if file_and_line:
            location = f" {file}:{line}"
        ctx.write(
            _color_timestamp(ctx)
            + _color_thread_id(ctx)
            + color_level_to_str(ctx.colors, ctx.level_to_color, lvl)
            + location
            + prefix
            + ctx.level_to_color[lvl]
            + msg
            + extra
            + ctx.colors.reset
            + "\n"
        )
    elif config.json:
        if file_and_line:
            location = f'"file":{quote(file)},"line":{line},'
        ctx.write(
            "{"
            + _json_timestamp(ctx)
            + _json_thread_id(ctx)
            + '"level":'
            + LEVEL_TO_JSON[lvl]
            + ","
            + location
            + '"msg":'
            + quote(msg)
            + extra
            + "}\n"
        )
    else:
        if file_and_line:
            location = f" {file}:{line}"
        ctx.write(lvl_letter + location + prefix + msg + extra + "\n")


__all__ = ["caller", "log_unconditional"]

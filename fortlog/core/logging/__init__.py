"""Logging state, line rendering and the leveled entry points."""

# Order matters: context must be loaded before the attributes package.
from fortlog.core.logging.console import ANSIColors
from fortlog.core.logging.context import LoggerContext, current_context, set_context, use_context
from fortlog.core.logging.entry import JSONEntry, time_to_ts, time_to_ts_str
from fortlog.core.logging.renderer import log_unconditional
from fortlog.core.logging.logger import (
    color_mode,
    console_logging,
    critf,
    debugf,
    errf,
    fatalf,
    ferrf,
    get_log_level,
    infof,
    is_enabled,
    log,
    log_attrs,
    log_debug,
    log_verbose,
    logf,
    logvf,
    printf,
    printf_logger,
    s,
    set_color_mode,
    set_defaults_for_client_tools,
    set_log_level,
    set_log_level_quiet,
    set_log_level_str,
    set_output,
    warnf,
)
from fortlog.core.logging.intercept import (
    InterceptHandler,
    LoguruSink,
    intercept_loguru,
    intercept_standard_logger,
    new_std_logger,
)

__all__ = [
    "ANSIColors",
    "InterceptHandler",
    "JSONEntry",
    "LoggerContext",
    "LoguruSink",
    "color_mode",
    "console_logging",
    "critf",
    "current_context",
    "debugf",
    "errf",
    "fatalf",
    "ferrf",
    "get_log_level",
    "infof",
    "intercept_loguru",
    "intercept_standard_logger",
    "is_enabled",
    "log",
    "log_attrs",
    "log_debug",
    "log_unconditional",
    "log_verbose",
    "logf",
    "logvf",
    "new_std_logger",
    "printf",
    "printf_logger",
    "s",
    "set_color_mode",
    "set_context",
    "set_defaults_for_client_tools",
    "set_log_level",
    "set_log_level_quiet",
    "set_log_level_str",
    "set_output",
    "time_to_ts",
    "time_to_ts_str",
    "use_context",
    "warnf",
]

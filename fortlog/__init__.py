"""fortlog - leveled, structured logging with JSON, plain text and color output.

Example::

    import fortlog as log

    log.infof("listening on %s", addr)
    log.s(log.Level.INFO, "request", log.text("method", "GET"), log.attr("status", 200))

Configuration lives in ``log.get_config()`` (see :class:`LogConfig`) and can
be set from ``LOGGER_*`` environment variables (applied on import, see
:func:`env_help`).
"""

from fortlog.core.logging import (
    ANSIColors,
    InterceptHandler,
    JSONEntry,
    LoggerContext,
    LoguruSink,
    color_mode,
    console_logging,
    critf,
    current_context,
    debugf,
    errf,
    fatalf,
    ferrf,
    get_log_level,
    infof,
    intercept_loguru,
    intercept_standard_logger,
    is_enabled,
    log,
    log_attrs,
    log_debug,
    log_verbose,
    logf,
    logvf,
    new_std_logger,
    printf,
    printf_logger,
    s,
    set_color_mode,
    set_context,
    set_defaults_for_client_tools,
    set_log_level,
    set_log_level_quiet,
    set_log_level_str,
    set_output,
    time_to_ts,
    use_context,
    warnf,
)
from fortlog.core.attributes import (
    JSONMarshaler,
    KeyVal,
    StringValue,
    ValueType,
    attr,
    boolean,
    floating,
    integer,
    text,
)
from fortlog.core.config import LogConfig, default_config
from fortlog.core.config.env import config_from_env, env_help
from fortlog.core.config.flags import LevelFlag, logger_static_flag_setup
from fortlog.core.exceptions import ConfigurationError, FatalError, FortlogError, InvalidLevelError
from fortlog.core.levels import (
    INVALID_LEVEL,
    JSON_STRING_LEVEL_TO_LEVEL,
    LEVEL_TO_JSON,
    LEVEL_TO_STR,
    Level,
    level_by_name,
    validate_level,
)

__version__ = "0.1.0"


def get_config() -> LogConfig:
    """Configuration of the current logging context."""
    return current_context().config


config_from_env()

__all__ = [
    "ANSIColors",
    "ConfigurationError",
    "FatalError",
    "FortlogError",
    "INVALID_LEVEL",
    "InterceptHandler",
    "InvalidLevelError",
    "JSONEntry",
    "JSONMarshaler",
    "JSON_STRING_LEVEL_TO_LEVEL",
    "KeyVal",
    "LEVEL_TO_JSON",
    "LEVEL_TO_STR",
    "Level",
    "LevelFlag",
    "LogConfig",
    "LoggerContext",
    "LoguruSink",
    "StringValue",
    "ValueType",
    "attr",
    "boolean",
    "color_mode",
    "config_from_env",
    "console_logging",
    "critf",
    "current_context",
    "debugf",
    "default_config",
    "env_help",
    "errf",
    "fatalf",
    "ferrf",
    "floating",
    "get_config",
    "get_log_level",
    "infof",
    "integer",
    "intercept_loguru",
    "intercept_standard_logger",
    "is_enabled",
    "level_by_name",
    "log",
    "log_attrs",
    "log_debug",
    "log_verbose",
    "logf",
    "logger_static_flag_setup",
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
    "text",
    "time_to_ts",
    "use_context",
    "validate_level",
    "warnf",
]

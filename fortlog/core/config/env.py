"""Configuration from ``LOGGER_*`` environment variables."""

from __future__ import annotations

import os
import sys
from typing import IO, Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from fortlog.core.exceptions import InvalidLevelError
from fortlog.core.levels import Level, validate_level
from fortlog.core.logging.context import current_context
from fortlog.core.logging.logger import errf, get_log_level, infof, set_log_level_quiet

ENV_PREFIX = "LOGGER_"
LEVEL_ENV_VAR = ENV_PREFIX + "LEVEL"


class EnvSettings(BaseSettings):
    """Logger settings read from the environment; unset variables stay ``None``."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore", populate_by_name=True)

    log_prefix: str | None = None
    log_file_and_line: bool | None = None
    fatal_panics: bool | None = None
    # "json" would shadow BaseModel.json
    json_output: bool | None = Field(None, validation_alias="LOGGER_JSON")
    no_timestamp: bool | None = None
    console_color: bool | None = None
    force_color: bool | None = None
    thread_id: bool | None = None
    combine_request_and_response: bool | None = None


# LogConfig fields settable from the environment, in help output order.
ENV_FIELDS = [
    "log_prefix",
    "log_file_and_line",
    "fatal_panics",
    "json",
    "no_timestamp",
    "console_color",
    "force_color",
    "thread_id",
    "combine_request_and_response",
]


_SETTINGS_FIELD = {"json": "json_output"}
_ENV_NAME = {"json_output": "LOGGER_JSON"}


def env_var_name(field: str) -> str:
    name = field.upper()
    if name.startswith(ENV_PREFIX):
        return name
    return ENV_PREFIX + name


def config_from_env() -> None:
    """Apply ``LOGGER_*`` environment variables to the current configuration.

    Invalid values are logged as errors and ignored, each variable on its own.
    """
    ctx = current_context()
    try:
        settings = EnvSettings()
    except ValidationError as exc:
        invalid: dict[str, None] = {}
        for err in exc.errors():
            loc = str(err["loc"][0]) if err["loc"] else ""
            errf("Invalid value for environment %s: %s", _ENV_NAME.get(loc, env_var_name(loc)), err["msg"])
            if loc:
                invalid[loc] = None
        # Init values take precedence over the environment: the other variables still apply.
        settings = EnvSettings(**invalid)
    for field in ENV_FIELDS:
        value = getattr(settings, _SETTINGS_FIELD.get(field, field))
        if value is not None:
            setattr(ctx.config, field, value)
    if settings.console_color is not None or settings.force_color is not None:
        ctx.set_color_mode()
    level_name = os.environ.get(LEVEL_ENV_VAR, "")
    if not level_name:
        return
    try:
        lvl = validate_level(level_name)
    except InvalidLevelError as exc:
        errf("Invalid log level from environment %s=%r: %s", LEVEL_ENV_VAR, level_name, exc)
        return
    set_log_level_quiet(lvl)
    infof("Log level set from environment %s to %s", LEVEL_ENV_VAR, Level(lvl))


def _env_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return f"'{value}'"


def env_help(stream: IO[str] | None = None) -> None:
    """Write the environment variables and their current values."""
    out = stream if stream is not None else sys.stdout
    config = current_context().config
    lines = ["# Logger environment variables:"]
    lines.extend(f"{env_var_name(field)}={_env_value(getattr(config, field))}" for field in ENV_FIELDS)
    lines.append(f"{LEVEL_ENV_VAR}={_env_value(get_log_level())}")
    out.write("\n".join(lines) + "\n")


__all__ = ["ENV_FIELDS", "EnvSettings", "config_from_env", "env_help", "env_var_name"]

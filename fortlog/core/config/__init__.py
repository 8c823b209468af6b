"""Logger configuration."""

from fortlog.core.config.settings import LogConfig, client_tools_config, default_config

__all__ = ["LogConfig", "client_tools_config", "default_config"]

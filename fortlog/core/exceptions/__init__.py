"""Exception handling module."""

from fortlog.core.exceptions.base import (
    ConfigurationError,
    FatalError,
    FortlogError,
    InvalidLevelError,
)

__all__ = [
    "ConfigurationError",
    "FatalError",
    "FortlogError",
    "InvalidLevelError",
]

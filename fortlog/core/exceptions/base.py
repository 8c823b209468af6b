"""fortlog core exception classes."""

from typing import Any


class FortlogError(Exception):
    """Base exception for fortlog."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

        Args:
            message: human readable message
            error_code: short machine readable code
            details: additional details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class InvalidLevelError(FortlogError, ValueError):
    """Unknown log level name."""

    def __init__(
        self,
        level_name: str,
        valid_names: list[str],
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details["level"] = level_name
        super_details["valid_levels"] = list(valid_names)
        super().__init__(
            f"invalid log level {level_name!r}, should be one of {', '.join(valid_names)}",
            "INVALID_LEVEL",
            super_details,
        )
        self.level_name = level_name


class ConfigurationError(FortlogError):
    """Invalid logger configuration value (e.g. from the environment)."""

    def __init__(
        self,
        message: str,
        variable: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if variable:
            super_details["variable"] = variable
        super().__init__(message, "CONFIGURATION_ERROR", super_details)
        self.variable = variable


class FatalError(FortlogError):
    """Raised by fatalf() when the configuration asks for fatal calls to abort by raising."""

    def __init__(self, message: str = "aborting...", details: dict[str, Any] | None = None):
        super().__init__(message, "FATAL", details)

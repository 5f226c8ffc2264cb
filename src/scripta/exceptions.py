"""Custom exception hierarchy for Scripta with helpful error messages."""

from __future__ import annotations

from typing import Any


class ScriptaError(Exception):
    """Base exception with helpful formatting for all Scripta errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScriptaError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class StorageError(ScriptaError):
    """Errors writing a script record to the key-value storage."""

    pass


class ScriptNotFoundError(ScriptaError):
    """No saved script matches the requested id."""

    pass


class ValidationError(ScriptaError):
    """Input validation errors with details about what was expected."""

    pass


class ExportError(ScriptaError):
    """Errors producing an export of the current script."""

    pass


class PrintError(ExportError):
    """The platform refused to open a surface for printing."""

    def __init__(
        self,
        message: str = "Could not open print window",
        hint: str | None = "Please allow popups or check your default browser",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize print error.

        Args:
            message: Error message
            hint: Suggestion for the user
            details: Optional extra information (e.g. the file that was handed off)
        """
        super().__init__(message=message, hint=hint, details=details)


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "storage_dir": "storage_path",
        "data_dir": "storage_path",
        "prefix": "key_prefix",
        "autosave": "autosave_delay",
        "page_lines": "lines_per_page",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )

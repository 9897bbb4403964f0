"""
Exceptions raised by the date picker core.

Only configuration problems surface as exceptions. Gestures that reference a
disabled, stale or out-of-range cell are ignored by the controller and never
raise.
"""

from typing import Any, Optional


class PickerError(Exception):
    """Base exception for all date picker errors.

    Args:
        message: Human-readable error description
        details: Optional dictionary containing additional error context

    Example:
        >>> raise PickerError("Picker failed", {"component": "controller"})
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigError(PickerError):
    """Exception raised when a picker configuration is invalid.

    Raised at construction time, never later: inverted date bounds, unknown
    weekday or month identifiers, a starting view finer than the selection
    type, or an initial selection that the constraints forbid.

    Args:
        message: Human-readable validation error description
        field_name: Name of the option that failed validation
        field_value: The invalid value that caused the error
        validation_errors: List of specific validation error messages
        details: Additional context about the validation failure

    Example:
        >>> raise ConfigError(
        ...     "min_date must be earlier or exactly at max_date",
        ...     field_name="min_date",
        ...     field_value="2022-01-01",
        ... )
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        validation_errors: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field_name = field_name
        self.field_value = field_value
        self.validation_errors = validation_errors or []

        error_details = details or {}
        if field_name:
            error_details["field_name"] = field_name
        if field_value is not None:
            error_details["field_value"] = str(field_value)
        if self.validation_errors:
            error_details["validation_errors"] = self.validation_errors

        super().__init__(message, error_details)


class ConfigFileError(ConfigError):
    """Exception raised when a configuration file cannot be read or parsed.

    Args:
        message: Human-readable error description
        file_path: Path to the configuration file
        original_error: The underlying exception that caused the failure
        details: Additional context about the failure
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        original_error: Optional[Exception] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.file_path = file_path
        self.original_error = original_error

        error_details = details or {}
        if file_path:
            error_details["file_path"] = file_path
        if original_error:
            error_details["original_error"] = str(original_error)
            error_details["error_type"] = type(original_error).__name__

        super().__init__(message, details=error_details)

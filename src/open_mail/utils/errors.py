"""Centralized error handling module."""

import inspect
from enum import Enum
from functools import wraps
from typing import Any, Dict

from open_mail.utils.logging import get_logger

_logger = None


def _get_logger():
    """Get logger with lazy initialisation."""
    global _logger
    if _logger is None:
        _logger = get_logger(__name__)
    return _logger


## Error Categories


class ErrorCategory(Enum):
    """Categories of errors for better handling."""

    STORAGE = "storage"
    VALIDATION = "validation"
    FILE_SYSTEM = "file_system"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


## Custom Exceptions


class OpenMailError(Exception):
    """Base exception for all open-mail errors."""

    category = ErrorCategory.UNKNOWN
    user_message = "An error occurred"

    def __init__(
        self, message: str | None = None, details: Dict[str, Any] | None = None
    ):
        """Initialise OpenMailError with optional message and details."""
        self.message = message or self.user_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error details to a dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


## Storage Errors


class StorageError(OpenMailError):
    """Base exception for record store errors."""

    category = ErrorCategory.STORAGE
    user_message = "Failed to load emails"


class EmailNotFoundError(StorageError):
    """Exception when an email is not found in the store."""

    user_message = "Email not found"


## Validation Errors


class ValidationError(OpenMailError):
    """Base exception for validation-related errors."""

    category = ErrorCategory.VALIDATION
    user_message = "Invalid input"


class InvalidPaginationError(ValidationError):
    """Exception for pagination values that are not integers."""

    user_message = "Pagination values must be integers"


class UnknownFormatError(ValidationError):
    """Exception for an output format with no formatter."""

    user_message = "Unknown output format"


## File System Errors


class FileSystemError(OpenMailError):
    """Base exception for file system-related errors."""

    category = ErrorCategory.FILE_SYSTEM
    user_message = "A file system error occurred"


## Configuration Errors


class ConfigurationError(OpenMailError):
    """Base exception for configuration-related errors."""

    category = ErrorCategory.CONFIGURATION
    user_message = "A configuration error occurred"


class MissingConfigError(ConfigurationError):
    """Exception for missing configuration settings."""

    user_message = "Missing configuration settings"


class InvalidConfigError(ConfigurationError):
    """Exception for invalid configuration settings."""

    user_message = "Invalid configuration settings"


## Error Handler


class ErrorHandler:
    """Centralized error handling and logging."""

    @staticmethod
    def handle(
        error: Exception, context: str = "", log_traceback: bool = True
    ) -> Dict[str, Any]:
        """Handle errors with logging and user-friendly message."""
        if isinstance(error, OpenMailError):
            _get_logger().error(f"{context}: {error.message}", extra={"context": error.details})
            if log_traceback:
                _get_logger().exception(error)
            return error.to_dict()
        else:
            _get_logger().error(f"{context}: {str(error)}")
            if log_traceback:
                _get_logger().exception(error)
            return {
                "error_type": "UnknownError",
                "category": ErrorCategory.UNKNOWN.value,
                "message": str(error),
                "details": {"context": context},
            }

    @staticmethod
    def wrap(func):
        """Decorator to wrap functions with error handling."""
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await func(*args, **kwargs)

                except OpenMailError:
                    raise

                except Exception as e:
                    _get_logger().exception(f"Unexpected error in {func.__name__}")
                    raise OpenMailError(
                        message=f"Unexpected error: {str(e)}",
                        details={"function": func.__name__},
                    ) from e

            return async_wrapper
        else:

            @wraps(func)
            def sync_wrapper(*args, **kwargs):
                try:
                    return func(*args, **kwargs)

                except OpenMailError:
                    raise

                except Exception as e:
                    _get_logger().exception(f"Unexpected error in {func.__name__}")
                    raise OpenMailError(
                        message=f"Unexpected error: {str(e)}",
                        details={"function": func.__name__},
                    ) from e

            return sync_wrapper


## Utility Functions


def format_error_message(error: Exception) -> str:
    """Format an error message for display."""
    if isinstance(error, OpenMailError):
        return error.message
    else:
        return "An unexpected error occurred - check logs for details."

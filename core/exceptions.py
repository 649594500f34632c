"""Custom exception classes for the application.

Engines never raise for missing records (they fall back to defaults); these
exceptions are raised at the API boundary and translated into uniform error
responses by `core.error_handlers`.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a referenced session, exercise or record does not exist."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'WorkoutSession', 'Exercise').
            identifier: ID or index that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ValidationError(AppException):
    """Raised when input fails validation outside of pydantic (e.g. path dates)."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class StorageError(AppException):
    """Raised when a stored document cannot be read or written."""

    def __init__(self, message: str, key: Optional[str] = None):
        """Initialize storage error.

        Args:
            message: Storage error message.
            key: Optional document key involved (e.g. 'cycleData').
        """
        details = {"key": key} if key else {}
        super().__init__(message, status_code=500, details=details)


class AIServiceError(AppException):
    """Raised by the AI client internally; converted to an error result."""

    def __init__(self, message: str, reason: str = "request_failed"):
        super().__init__(message, status_code=502, details={"reason": reason})


class ConfigurationError(AppException):
    """Raised when application configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=500, details=details)

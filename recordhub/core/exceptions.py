"""Custom exception hierarchy.

Every error a handler can surface derives from ``AppError``. The exception
handlers in ``recordhub.main`` map each family to an HTTP status:

* ``ValidationError`` -> 400
* ``NotFoundError`` -> 404
* ``UpstreamError`` and subclasses -> 500, with the cause as ``details``
"""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    status_code: int = 500

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    @property
    def details(self) -> Optional[str]:
        """Underlying cause message, if one was captured."""
        if self.original_error is None:
            return None
        return str(self.original_error) or type(self.original_error).__name__


class ValidationError(AppError):
    """Raised when input validation fails."""

    status_code = 400


class NotFoundError(AppError):
    """Raised when a requested record does not exist."""

    status_code = 404


class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing."""
    pass


class UpstreamError(AppError):
    """Raised when a dependency (store or model provider) fails."""
    pass


class DatabaseError(UpstreamError):
    """Raised when a database operation fails."""
    pass


class APIClientError(UpstreamError):
    """Raised when an external API call fails."""
    pass


class APITimeoutError(APIClientError):
    """Raised when an external API call times out."""
    pass


class LLMServiceError(UpstreamError):
    """Raised when triplet extraction cannot reach the model."""
    pass

"""
Custom exceptions for Nightfall client operations.

This module defines the exception classes raised by the upload and scan
machinery. Structured API errors live in ``core.api.errors``.
"""
from typing import Optional


class NightfallException(Exception):
    """Base exception for all Nightfall-related errors."""

    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class NightfallConfigError(NightfallException):
    """Exception raised for invalid client configuration."""
    pass


class NightfallTransportError(NightfallException):
    """
    Exception raised when a request never produced an HTTP response.

    The underlying network exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            method: HTTP method of the failed request
            url: Target URL of the failed request
        """
        self.method = method
        self.url = url
        super().__init__(message)


class NightfallCancelledError(NightfallException):
    """Exception raised when the caller cancelled an operation."""
    pass


class NightfallTimeoutError(NightfallCancelledError):
    """Exception raised when the caller-supplied timeout expired."""

    def __init__(self, message: str, timeout: Optional[float] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            timeout: The timeout that expired, in seconds
        """
        self.timeout = timeout
        super().__init__(message)

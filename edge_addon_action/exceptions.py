"""Custom exceptions for edge-addon-action."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ._publish.operation import Operation


class EdgeAddonError(Exception):
    """Base exception for all edge-addon-action operations."""


class ConfigurationError(EdgeAddonError):
    """Raised when configuration validation fails."""


class AuthenticationError(EdgeAddonError):
    """Raised when an access token cannot be obtained."""


class FileProcessingError(EdgeAddonError):
    """Raised when the package archive cannot be read."""


class APIError(EdgeAddonError):
    """
    Raised when the Edge Add-ons API rejects a request.

    Carries the raw status code and body so callers can report what the
    store actually answered. ``status_code`` is None for transport failures
    (connection refused, timeout) where no response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class OperationFailedError(EdgeAddonError):
    """Raised when a polled operation reports an explicit failure status."""

    def __init__(self, operation: "Operation") -> None:
        detail = operation.message or "no message"
        if operation.error_code:
            detail += f" (errorCode={operation.error_code})"
        super().__init__(f"Operation {operation.id or '<unknown>'} ended with status {operation.status}: {detail}")
        self.operation = operation


class PollingExhaustedError(EdgeAddonError):
    """
    Raised when an operation is still in progress after every polling attempt.

    ``operation`` is the last status the store reported, if any check ran.
    """

    def __init__(self, message: str, operation: Optional["Operation"] = None) -> None:
        super().__init__(message)
        self.operation = operation

"""
Error types for the AirTable → Outline sync.

Every failure aborts the run and reaches the caller unchanged.
"""

from typing import Optional


class SyncError(RuntimeError):
    """Base class for all sync failures."""


class ConfigurationError(SyncError, ValueError):
    """A required setting is missing or invalid."""


class TransportError(SyncError):
    """
    Non-2xx HTTP response, timeout, or connection failure.

    status_code is None when no response was received at all.
    """

    def __init__(self, status_code: Optional[int], body: str):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"Request failed: {body}"
        else:
            message = f"HTTP {status_code}: {body}"
        super().__init__(message)


class SourceAPIError(SyncError):
    """AirTable returned a body that is not a valid records page."""


class DestinationAPIError(SyncError):
    """Outline reported a failure despite a 2xx status."""

    def __init__(self, message: str, error: Optional[str] = None):
        self.error = error
        super().__init__(f"{error}: {message}" if error else message)


class DataTransformationError(SyncError):
    """Reserved for rendering failures; rendering is currently total."""

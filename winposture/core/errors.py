"""Exception types shared across the audit engine."""
from typing import Optional


class WinpostureError(Exception):
    """Base class for all winposture errors."""


class CollaboratorError(WinpostureError):
    """An OS introspection call failed.

    ``error_code`` carries the native (Win32 / WMI) error code when one is
    available. It is diagnostic only and never drives a compliance verdict.
    """

    def __init__(self, message: str, error_code: Optional[int] = None):
        super().__init__(message)
        self.error_code = error_code


class SnapshotError(WinpostureError):
    """A state snapshot file could not be loaded."""


class ConfigError(WinpostureError):
    """A configuration file could not be loaded."""

"""Typed exception hierarchy for guidesync.

All exceptions inherit from GuidesyncError so callers can catch any
application-level failure with a single except clause. Each exception
carries a descriptive message plus the context needed for debugging.
"""

from typing import Optional


class GuidesyncError(Exception):
    """Base exception for all guidesync errors."""
    pass


class ConversionError(GuidesyncError):
    """Raised when content conversion between formats fails."""

    def __init__(self, message: str, source: Optional[str] = None):
        if source:
            message = f"{message} (source: {source})"
        super().__init__(message)
        self.source = source


class ConfigError(GuidesyncError):
    """Raised when the configuration file is invalid or malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        if field:
            full_message = f"Configuration error in field '{field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.field = field
        self.original_message = message


class FilesystemError(GuidesyncError):
    """Raised when reading an input or configuration file fails."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"File operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason

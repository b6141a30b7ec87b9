"""ClawScan custom exceptions."""

from __future__ import annotations


class ClawScanError(Exception):
    """Base class for all ClawScan errors."""


class NotReadableError(ClawScanError, OSError):
    """Raised when a file cannot be read as text (binary, permissions, missing)."""

    def __init__(self, path: str, reason: str = None):
        self.path = path
        self.reason = reason
        message = f"Cannot read {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ScanRootError(ClawScanError, FileNotFoundError):
    """Raised when the scan root is missing or is not a directory."""


class UnknownFormatError(ClawScanError, ValueError):
    """Raised when an output format has no registered reporter."""


class UnknownScannerError(ClawScanError, ValueError):
    """Raised when a requested detector name is not registered."""


class ClawScanConfigError(ClawScanError):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str, config_path: str = None, section: str = None):
        self.config_path = config_path
        self.section = section
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.config_path:
            msg += f" (config: {self.config_path})"
        if self.section:
            msg += f" (section: {self.section})"
        return msg

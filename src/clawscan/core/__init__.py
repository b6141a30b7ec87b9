"""Core data model, errors and redaction."""

from .findings import Finding, ScanResult, Severity, SEVERITY_ORDER, compare_severity
from .exceptions import (
    ClawScanError,
    ClawScanConfigError,
    NotReadableError,
    ScanRootError,
    UnknownFormatError,
    UnknownScannerError,
)
from .redaction import mask_secret

__all__ = [
    "Finding",
    "ScanResult",
    "Severity",
    "SEVERITY_ORDER",
    "compare_severity",
    "ClawScanError",
    "ClawScanConfigError",
    "NotReadableError",
    "ScanRootError",
    "UnknownFormatError",
    "UnknownScannerError",
    "mask_secret",
]

"""ClawScan package metadata and public API."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("clawscan")
except PackageNotFoundError:
    __version__ = "0.1.0"

from clawscan.core.findings import Finding, ScanResult, Severity  # noqa: E402
from clawscan.scanner.engine import scan, quick_scan  # noqa: E402
from clawscan.reporters import format_results  # noqa: E402

__all__ = [
    "__version__",
    "Finding",
    "ScanResult",
    "Severity",
    "scan",
    "quick_scan",
    "format_results",
]

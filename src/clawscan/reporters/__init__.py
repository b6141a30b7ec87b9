"""Output formats for an already computed ScanResult."""

from __future__ import annotations

import json

from clawscan.core.exceptions import UnknownFormatError
from clawscan.core.findings import ScanResult
from clawscan.sarif.export import build_sarif
from .console import ConsoleReporter
from .json_report import JsonReporter


class SarifReporter:
    name = "sarif"

    def report(self, result: ScanResult) -> str:
        return json.dumps(build_sarif(result), indent=2)


REPORTERS = {
    "console": ConsoleReporter,
    "json": JsonReporter,
    "sarif": SarifReporter,
}

FORMATS = tuple(REPORTERS)


def format_results(result: ScanResult, fmt: str = "console", color: bool = None) -> str:
    """
    Render *result* in the requested format.

    Raises:
        UnknownFormatError: no reporter is registered for *fmt*
    """
    reporter_cls = REPORTERS.get(fmt)
    if reporter_cls is None:
        raise UnknownFormatError(
            f"Unknown format: {fmt}. Available formats: {', '.join(FORMATS)}"
        )
    reporter = reporter_cls(color=color) if reporter_cls is ConsoleReporter else reporter_cls()
    return reporter.report(result)


__all__ = [
    "ConsoleReporter",
    "JsonReporter",
    "SarifReporter",
    "REPORTERS",
    "FORMATS",
    "format_results",
]

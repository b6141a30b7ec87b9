# SPDX-License-Identifier: MIT
"""Scan engine: discovery, detector runs, severity filtering and tallies."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

from clawscan.core.exceptions import ScanRootError
from clawscan.core.findings import Finding, ScanResult, Severity, compare_severity, empty_summary
from clawscan.detectors import DetectorRegistry, get_detector_registry
from .context import ScanContext
from .discovery import discover_files

logger = logging.getLogger(__name__)


def scan(
    root: Union[Path, str],
    exclude: Optional[Iterable[str]] = None,
    scanners: Optional[Iterable[str]] = None,
    min_severity: Optional[Union[Severity, str]] = None,
    registry: Optional[DetectorRegistry] = None,
) -> ScanResult:
    """
    Scan *root* with the selected detectors.

    Args:
        root: Directory to scan
        exclude: Discovery exclusion patterns (default list when ``None``)
        scanners: Detector names to run, in order (all when ``None``)
        min_severity: Drop findings below this severity
        registry: Detector registry (the global one when ``None``)

    Returns:
        ScanResult with findings in detector run order

    Raises:
        ScanRootError: root is missing or not a directory
        UnknownScannerError: a requested detector does not exist
        ValueError: min_severity is not a known level
    """
    start = time.monotonic()
    root_path = Path(root)
    if not root_path.is_dir():
        raise ScanRootError(f"Path not found or not a directory: {root_path}")

    threshold = Severity.parse(min_severity) if min_severity is not None else None
    detectors = (registry or get_detector_registry()).select(
        list(scanners) if scanners is not None else None
    )

    files = discover_files(root_path, exclude)
    context = ScanContext(root_path, files)
    logger.info("Discovered %d files under %s", len(files), root_path)

    findings: List[Finding] = []
    for detector in detectors:
        detector_findings = detector.scan(context)
        if threshold is not None:
            detector_findings = [
                f for f in detector_findings if compare_severity(f.severity, threshold) >= 0
            ]
        logger.info("%s: %d findings", detector.name, len(detector_findings))
        findings.extend(detector_findings)

    summary = empty_summary()
    for finding in findings:
        summary[finding.severity.value] += 1

    return ScanResult(
        root=str(root),
        files_scanned=len(files),
        findings=findings,
        duration_ms=int((time.monotonic() - start) * 1000),
        summary=summary,
    )


def quick_scan(root: Union[Path, str], fmt: str = "console") -> str:
    """Scan with defaults and return the formatted report."""
    from clawscan.reporters import format_results

    return format_results(scan(root), fmt)

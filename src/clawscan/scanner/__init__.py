# SPDX-License-Identifier: MIT
"""Filesystem side of the engine: discovery, scan context and config.

The engine itself lives in :mod:`clawscan.scanner.engine`; it is not
re-exported here because detectors import :mod:`.context`.
"""
from .context import ScanContext
from .discovery import DEFAULT_EXCLUDES, discover_files

__all__ = ["ScanContext", "DEFAULT_EXCLUDES", "discover_files"]

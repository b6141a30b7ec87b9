# SPDX-License-Identifier: MIT
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Sequence

from clawscan.core.findings import Finding
from clawscan.scanner.context import ScanContext


class Detector(ABC):
    """Base class for all detectors."""

    # Glob hints describing which files a detector cares about. Documentation
    # only; discovery does not filter on them.
    file_patterns: Sequence[str] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique detector name (e.g., 'api-keys', 'docker')."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary of what the detector looks for."""

    @abstractmethod
    def scan(self, context: ScanContext) -> List[Finding]:
        """Inspect the context and return zero or more findings.

        Per-file read failures must be swallowed; a detector that cannot
        evaluate a file contributes nothing for it.
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"

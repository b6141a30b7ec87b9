# SPDX-License-Identifier: MIT
"""Finding data structures and utilities for ClawScan."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Union


class Severity(Enum):
    """Severity levels, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANKS[self]

    @classmethod
    def parse(cls, value: Union["Severity", str]) -> "Severity":
        """Accept a Severity or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Invalid severity: {value}. Use: {valid}") from None


_SEVERITY_RANKS = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
    Severity.INFO: 0,
}

SEVERITY_ORDER = tuple(Severity)


def compare_severity(a: Severity, b: Severity) -> int:
    """Positive if *a* is more severe than *b*, negative if less, 0 if equal."""
    return a.rank - b.rank


@dataclass(frozen=True)
class Finding:
    """A single security issue reported by a detector."""

    scanner: str  # detector name (e.g., 'api-keys', 'docker')
    severity: Severity
    title: str
    description: str
    file: str  # path relative to the scan root
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based
    match: Optional[str] = None  # masked excerpt, never the raw secret
    fix: Optional[str] = None
    cwe: Optional[str] = None  # e.g. "CWE-798"

    def to_dict(self) -> Dict[str, Any]:
        """Convert Finding to dictionary format."""
        result = {
            "scanner": self.scanner,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "file": self.file,
        }

        for key in ("line", "column", "match", "fix", "cwe"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value

        return result


def empty_summary() -> Dict[str, int]:
    return {s.value: 0 for s in SEVERITY_ORDER}


@dataclass
class ScanResult:
    """Aggregate output of one engine run."""

    root: str
    files_scanned: int
    findings: List[Finding] = field(default_factory=list)
    duration_ms: int = 0
    summary: Dict[str, int] = field(default_factory=empty_summary)

    def has_blocking_findings(self) -> bool:
        """True when any critical or high finding is present."""
        return self.summary["critical"] > 0 or self.summary["high"] > 0

    def exceeds(self, level: Union[Severity, str]) -> bool:
        """True when any finding is at or above *level*."""
        threshold = Severity.parse(level)
        return any(
            self.summary[s.value] > 0
            for s in SEVERITY_ORDER
            if compare_severity(s, threshold) >= 0
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "filesScanned": self.files_scanned,
            "durationMs": self.duration_ms,
            "summary": dict(self.summary),
            "findings": [f.to_dict() for f in self.findings],
        }

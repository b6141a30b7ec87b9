# SPDX-License-Identifier: MIT
"""Human-readable terminal report."""

from __future__ import annotations

import os
from typing import List, Optional

from clawscan.core.findings import Finding, ScanResult, Severity, SEVERITY_ORDER

COLORS = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "red": "\x1b[31m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "cyan": "\x1b[36m",
    "green": "\x1b[32m",
    "magenta": "\x1b[35m",
    "white": "\x1b[37m",
    "bg_red": "\x1b[41m",
}

SEVERITY_COLORS = {
    Severity.CRITICAL: ("bg_red", "white"),
    Severity.HIGH: ("red",),
    Severity.MEDIUM: ("yellow",),
    Severity.LOW: ("blue",),
    Severity.INFO: ("cyan",),
}

SEVERITY_ICONS = {
    Severity.CRITICAL: "🚨",
    Severity.HIGH: "🔴",
    Severity.MEDIUM: "🟡",
    Severity.LOW: "🔵",
    Severity.INFO: "ℹ️",
}

RULE = "═" * 63


class ConsoleReporter:
    """Pretty-prints scan results for a terminal."""

    name = "console"

    def __init__(self, color: Optional[bool] = None) -> None:
        # NO_COLOR convention: any value disables colour
        self.color = ("NO_COLOR" not in os.environ) if color is None else color

    def _c(self, *names: str) -> str:
        if not self.color:
            return ""
        return "".join(COLORS[n] for n in names)

    def format_severity(self, severity: Severity) -> str:
        color = self._c(*SEVERITY_COLORS[severity])
        return f"{SEVERITY_ICONS[severity]} {color}{severity.value.upper()}{self._c('reset')}"

    def format_finding(self, finding: Finding, index: int) -> str:
        c, reset, dim = self._c, self._c("reset"), self._c("dim")
        location = finding.file + (f":{finding.line}" if finding.line else "")
        lines = [
            "",
            f"{c('bold')}{index + 1}. {finding.title}{reset}",
            f"   {self.format_severity(finding.severity)}",
            f"   {dim}Scanner:{reset} {finding.scanner}",
            f"   {dim}File:{reset} {c('cyan')}{location}{reset}",
        ]

        if finding.match:
            lines.append(f"   {dim}Match:{reset} {c('magenta')}{finding.match}{reset}")

        lines.append(f"   {dim}Description:{reset} {finding.description}")

        if finding.fix:
            lines.append(f"   {c('green')}Fix:{reset} {finding.fix}")

        if finding.cwe:
            cwe_id = finding.cwe.replace("CWE-", "")
            lines.append(
                f"   {dim}Reference:{reset} https://cwe.mitre.org/data/definitions/{cwe_id}.html"
            )

        return "\n".join(lines)

    def report(self, result: ScanResult) -> str:
        c, reset, bold = self._c, self._c("reset"), self._c("bold")
        lines: List[str] = [
            "",
            f"{bold}{c('cyan')}ClawScan Security Report{reset}",
            f"{c('cyan')}{RULE}{reset}",
            "",
            f"{c('dim')}Scanned:{reset} {result.root}",
            f"{c('dim')}Files:{reset} {result.files_scanned}",
            f"{c('dim')}Duration:{reset} {result.duration_ms}ms",
            "",
        ]

        total = len(result.findings)
        if total == 0:
            lines.append(f"{c('green', 'bold')}✅ No security issues found!{reset}")
            lines.append("")
            return "\n".join(lines)

        lines.append(f"{bold}Found {total} issue{'' if total == 1 else 's'}:{reset}")
        lines.append("")
        for severity in SEVERITY_ORDER:
            count = result.summary[severity.value]
            if count > 0:
                lines.append(f"   {self.format_severity(severity)}: {count}")

        lines.extend(["", f"{bold}{RULE}{reset}", f"{bold}{'Findings':^63}{reset}", f"{bold}{RULE}{reset}"])

        # Stable sort keeps detector order within a severity
        ordered = sorted(result.findings, key=lambda f: -f.severity.rank)
        for i, finding in enumerate(ordered):
            lines.append(self.format_finding(finding, i))

        lines.extend(["", f"{bold}{RULE}{reset}"])
        if result.summary["critical"] > 0:
            lines.append(f"{c('red', 'bold')}⚠️  CRITICAL issues found! Fix these immediately.{reset}")
        elif result.summary["high"] > 0:
            lines.append(f"{c('yellow', 'bold')}⚠️  HIGH severity issues found. Review and fix soon.{reset}")

        lines.append("")
        return "\n".join(lines)

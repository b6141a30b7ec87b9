# SPDX-License-Identifier: MIT
"""
Ignore-coverage analyzer.

Checks that a repository's root .gitignore covers a catalog of sensitive
files. Coverage is approximate: a handful of textual equivalences, not
gitignore glob semantics.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Set, Tuple

from clawscan.core.exceptions import NotReadableError
from clawscan.core.findings import Finding, Severity
from clawscan.scanner.context import ScanContext
from .base import Detector

logger = logging.getLogger(__name__)

NAME = "gitignore"

GITIGNORE = ".gitignore"


@dataclass(frozen=True)
class RequiredIgnore:
    pattern: str
    description: str
    severity: Severity
    # Existence of any of these escalates to the full severity
    check_files: Tuple[str, ...] = ()


REQUIRED_IGNORES = (
    # Environment files
    RequiredIgnore(
        ".env",
        "Environment files often contain API keys and secrets",
        Severity.CRITICAL,
        (".env", ".env.local", ".env.production"),
    ),
    RequiredIgnore(
        ".env.*",
        "Environment variant files (.env.local, .env.production) contain secrets",
        Severity.CRITICAL,
    ),
    # Private keys and certificates
    RequiredIgnore("*.pem", "PEM files may contain private keys", Severity.CRITICAL),
    RequiredIgnore("*.key", "Key files contain private cryptographic keys", Severity.CRITICAL),
    RequiredIgnore("*.p12", "P12/PKCS12 files contain certificates and private keys", Severity.HIGH),
    RequiredIgnore("*.pfx", "PFX files contain certificates and private keys", Severity.HIGH),
    # Secrets directories
    RequiredIgnore(
        "secrets/",
        "Secrets directories should never be committed",
        Severity.CRITICAL,
        ("secrets/",),
    ),
    RequiredIgnore(".secrets/", "Hidden secrets directories should never be committed", Severity.CRITICAL),
    # AI agent configs
    RequiredIgnore(
        "openclaw.json",
        "OpenClaw config may contain embedded API keys",
        Severity.HIGH,
        ("openclaw.json",),
    ),
    RequiredIgnore("claude.json", "Claude config may contain API keys", Severity.HIGH),
    # Credential files
    RequiredIgnore("credentials.json", "Credentials file contains authentication secrets", Severity.CRITICAL),
    RequiredIgnore("*.credentials", "Credential files should not be committed", Severity.HIGH),
    # Cloud and SSH credentials
    RequiredIgnore(".aws/", "AWS config directory contains credentials", Severity.CRITICAL),
    RequiredIgnore(".ssh/", "SSH directory contains private keys", Severity.CRITICAL),
    RequiredIgnore("id_rsa", "SSH private key", Severity.CRITICAL),
    RequiredIgnore("id_ed25519", "SSH private key", Severity.CRITICAL),
    # Databases
    RequiredIgnore("*.sqlite", "SQLite databases may contain sensitive data", Severity.MEDIUM),
    RequiredIgnore("*.db", "Database files may contain sensitive data", Severity.MEDIUM),
    # IDE settings
    RequiredIgnore(".idea/", "IDE config may contain project-specific secrets", Severity.LOW),
    RequiredIgnore(".vscode/settings.json", "VS Code settings may contain project secrets", Severity.LOW),
    # Logs
    RequiredIgnore("*.log", "Log files may contain sensitive information", Severity.LOW),
)


def parse_gitignore(content: str) -> Set[str]:
    """
    Parse .gitignore content into a pattern set.

    Every entry is kept verbatim; entries not starting with ``*`` or ``/``
    also get ``/entry`` and ``**/entry`` variants.
    """
    patterns: Set[str] = set()

    for line in content.split("\n"):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        patterns.add(trimmed)
        if not trimmed.startswith("*") and not trimmed.startswith("/"):
            patterns.add(f"/{trimmed}")
            patterns.add(f"**/{trimmed}")

    return patterns


def is_pattern_covered(pattern: str, ignore_patterns: Set[str]) -> bool:
    """Approximate check that *pattern* is ignored by *ignore_patterns*."""
    if pattern in ignore_patterns:
        return True
    if f"/{pattern}" in ignore_patterns:
        return True
    if f"**/{pattern}" in ignore_patterns:
        return True

    for ignore_pattern in ignore_patterns:
        if ignore_pattern == pattern:
            return True
        # .env.* and friends cover every .env requirement
        if pattern.startswith(".env") and ".env" in ignore_pattern:
            return True
        # Directory entry containing the required directory name
        if pattern.endswith("/") and ignore_pattern.endswith("/"):
            if pattern[:-1] in ignore_pattern:
                return True

    return False


class GitignoreDetector(Detector):
    """Detects missing .gitignore entries for sensitive files."""

    file_patterns = ("**/.gitignore",)

    @property
    def name(self) -> str:
        return NAME

    @property
    def description(self) -> str:
        return "Detects missing gitignore entries for sensitive files"

    def scan(self, context: ScanContext) -> List[Finding]:
        findings: List[Finding] = []

        if not context.file_exists(GITIGNORE):
            # Only a git repository needs an ignore file
            if context.file_exists(".git"):
                findings.append(
                    Finding(
                        scanner=NAME,
                        severity=Severity.CRITICAL,
                        title="Missing .gitignore File",
                        description=(
                            "This Git repository has no .gitignore file. "
                            "Sensitive files could be accidentally committed."
                        ),
                        file=GITIGNORE,
                        fix=(
                            "Create a .gitignore file with appropriate entries for your project "
                            "type. Use https://gitignore.io for templates."
                        ),
                        cwe="CWE-200",
                    )
                )
            return findings

        try:
            content = context.read_file(GITIGNORE)
        except NotReadableError as e:
            logger.debug("gitignore: %s", e)
            return findings

        ignore_patterns = parse_gitignore(content)

        for required in REQUIRED_IGNORES:
            if is_pattern_covered(required.pattern, ignore_patterns):
                continue

            file_exists = any(context.file_exists(f) for f in required.check_files)

            if file_exists:
                severity = required.severity
            elif required.severity is Severity.CRITICAL:
                severity = Severity.HIGH
            else:
                severity = required.severity

            description = f'Pattern "{required.pattern}" is not in .gitignore. {required.description}.'
            if file_exists:
                description += " WARNING: This file exists in your repository!"

            findings.append(
                Finding(
                    scanner=NAME,
                    severity=severity,
                    title=f"Missing Gitignore: {required.pattern}",
                    description=description,
                    file=GITIGNORE,
                    fix=f'Add "{required.pattern}" to your .gitignore file',
                    cwe="CWE-200",
                )
            )

        return findings

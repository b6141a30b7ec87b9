# SPDX-License-Identifier: MIT
"""
Credential pattern detector.

Matches a catalog of service-specific key signatures against whole file
contents, drops placeholders and reports masked matches.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from clawscan.core.exceptions import NotReadableError
from clawscan.core.findings import Finding, Severity
from clawscan.core.redaction import mask_secret
from clawscan.scanner.context import ScanContext
from .base import Detector

logger = logging.getLogger(__name__)

NAME = "api-keys"


@dataclass(frozen=True)
class KeyPattern:
    """One entry of the credential signature catalog."""

    name: str  # machine key, e.g. 'openAI'
    service: str  # display name
    pattern: re.Pattern[str]
    severity: Severity
    placeholder_pattern: Optional[re.Pattern[str]] = None


KEY_PATTERNS = (
    # AI/LLM providers
    KeyPattern(
        name="openRouter",
        service="OpenRouter",
        pattern=re.compile(r"sk-or-v1-[a-zA-Z0-9]{64}"),
        severity=Severity.CRITICAL,
    ),
    KeyPattern(
        name="openAI",
        service="OpenAI",
        pattern=re.compile(r"sk-[a-zA-Z0-9]{48}"),
        severity=Severity.CRITICAL,
        placeholder_pattern=re.compile(r"sk-your|sk-xxx|sk-test|sk-example", re.IGNORECASE),
    ),
    KeyPattern(
        name="anthropic",
        service="Anthropic",
        pattern=re.compile(r"sk-ant-[a-zA-Z0-9\-_]{95}"),
        severity=Severity.CRITICAL,
    ),
    # Slack
    KeyPattern(
        name="slackBotToken",
        service="Slack Bot Token",
        pattern=re.compile(r"xoxb-[0-9]{10,13}-[0-9]{10,13}-[a-zA-Z0-9]{24}"),
        severity=Severity.CRITICAL,
    ),
    KeyPattern(
        name="slackAppToken",
        service="Slack App Token",
        pattern=re.compile(r"xapp-[0-9]-[A-Z0-9]+-[0-9]+-[a-f0-9]{64}"),
        severity=Severity.CRITICAL,
    ),
    KeyPattern(
        name="slackUserToken",
        service="Slack User Token",
        pattern=re.compile(r"xoxp-[0-9]{10,13}-[0-9]{10,13}-[0-9]{10,13}-[a-f0-9]{32}"),
        severity=Severity.CRITICAL,
    ),
    # Cloud providers. AWS secret keys are left out: 40 chars of base64
    # match far too much without key-name context.
    KeyPattern(
        name="awsAccessKey",
        service="AWS Access Key",
        pattern=re.compile(r"AKIA[0-9A-Z]{16}"),
        severity=Severity.CRITICAL,
    ),
    KeyPattern(
        name="gcpApiKey",
        service="Google Cloud API Key",
        pattern=re.compile(r"AIza[0-9A-Za-z_-]{35}"),
        severity=Severity.CRITICAL,
    ),
    # GitHub
    KeyPattern(
        name="githubToken",
        service="GitHub Token",
        pattern=re.compile(r"gh[pousr]_[A-Za-z0-9_]{36,255}"),
        severity=Severity.CRITICAL,
    ),
    KeyPattern(
        name="githubOAuth",
        service="GitHub OAuth",
        pattern=re.compile(r"gho_[A-Za-z0-9_]{36}"),
        severity=Severity.CRITICAL,
    ),
    # Other services
    KeyPattern(
        name="braveSearch",
        service="Brave Search API",
        pattern=re.compile(r"BSA[A-Za-z0-9]{20,}"),
        severity=Severity.HIGH,
    ),
    KeyPattern(
        name="stripeKey",
        service="Stripe API Key",
        pattern=re.compile(r"sk_live_[a-zA-Z0-9]{24,}"),
        severity=Severity.CRITICAL,
    ),
    KeyPattern(
        name="stripeTestKey",
        service="Stripe Test Key",
        pattern=re.compile(r"sk_test_[a-zA-Z0-9]{24,}"),
        severity=Severity.MEDIUM,
    ),
    KeyPattern(
        name="twilioKey",
        service="Twilio API Key",
        pattern=re.compile(r"SK[a-f0-9]{32}"),
        severity=Severity.CRITICAL,
    ),
    KeyPattern(
        name="sendgridKey",
        service="SendGrid API Key",
        pattern=re.compile(r"SG\.[a-zA-Z0-9_-]{22}\.[a-zA-Z0-9_-]{43}"),
        severity=Severity.CRITICAL,
    ),
    # Database connection strings with inline credentials
    KeyPattern(
        name="mongodbUri",
        service="MongoDB Connection String",
        pattern=re.compile(r"mongodb(\+srv)?://[^:]+:[^@]+@[^/]+"),
        severity=Severity.CRITICAL,
    ),
    KeyPattern(
        name="postgresUri",
        service="PostgreSQL Connection String",
        pattern=re.compile(r"postgres(ql)?://[^:]+:[^@]+@[^/]+"),
        severity=Severity.CRITICAL,
    ),
    # Private keys
    KeyPattern(
        name="privateKey",
        service="Private Key",
        pattern=re.compile(r"-----BEGIN (RSA |EC |OPENSSH |DSA )?PRIVATE KEY-----"),
        severity=Severity.CRITICAL,
    ),
)

COMMON_PLACEHOLDERS = (
    re.compile(r"your[_-]?.*[_-]?key", re.IGNORECASE),
    re.compile(r"xxx+", re.IGNORECASE),
    re.compile(r"placeholder", re.IGNORECASE),
    re.compile(r"example", re.IGNORECASE),
    re.compile(r"test[_-]?key", re.IGNORECASE),
    re.compile(r"dummy", re.IGNORECASE),
    re.compile(r"fake", re.IGNORECASE),
    re.compile(r"sample", re.IGNORECASE),
)

SKIP_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".ico", ".svg",
    ".woff", ".woff2", ".ttf", ".eot",
    ".zip", ".tar", ".gz", ".rar",
    ".pdf", ".doc", ".docx",
    ".exe", ".dll", ".so", ".dylib",
    ".lock", ".lockb",
}

# Lock files are full of hashes that look like keys
SKIP_FILES = {
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    "Cargo.lock",
    "Gemfile.lock",
    "composer.lock",
    "poetry.lock",
}

SKIP_DIRS = {
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    "coverage",
    "__pycache__",
    ".venv",
    "venv",
}


def is_placeholder(text: str, pattern: Optional[re.Pattern[str]] = None) -> bool:
    """True if *text* looks like example or dummy data rather than a real key."""
    if pattern is not None and pattern.search(text):
        return True
    return any(p.search(text) for p in COMMON_PLACEHOLDERS)


def should_skip(file_path: str) -> bool:
    """Skip binary/media/archive extensions, lock files and vendored dirs."""
    parts = file_path.split("/")
    file_name = parts[-1]

    dot = file_name.rfind(".")
    if dot != -1 and file_name[dot:].lower() in SKIP_EXTENSIONS:
        return True

    if file_name in SKIP_FILES:
        return True

    return any(part in SKIP_DIRS for part in parts)


class ApiKeysDetector(Detector):
    """Detects exposed API keys and secrets in any text file."""

    file_patterns = ("**/*",)

    @property
    def name(self) -> str:
        return NAME

    @property
    def description(self) -> str:
        return "Detects exposed API keys and secrets"

    def scan(self, context: ScanContext) -> List[Finding]:
        findings: List[Finding] = []

        for file_path in context.files:
            if should_skip(file_path):
                continue
            try:
                content = context.read_file(file_path)
            except NotReadableError as e:
                logger.debug("api-keys: %s", e)
                continue
            findings.extend(self.scan_content(file_path, content))

        return findings

    def scan_content(self, file_path: str, content: str) -> List[Finding]:
        findings: List[Finding] = []

        for key_pattern in KEY_PATTERNS:
            for m in key_pattern.pattern.finditer(content):
                matched = m.group(0)
                if is_placeholder(matched, key_pattern.placeholder_pattern):
                    continue

                line = content.count("\n", 0, m.start()) + 1
                column = m.start() - content.rfind("\n", 0, m.start())

                findings.append(
                    Finding(
                        scanner=NAME,
                        severity=key_pattern.severity,
                        title=f"Exposed {key_pattern.service} API Key",
                        description=(
                            f"Found a {key_pattern.service} API key. This secret should be "
                            "stored in environment variables or a secrets manager, "
                            "not in source code."
                        ),
                        file=file_path,
                        line=line,
                        column=column,
                        match=mask_secret(matched),
                        fix=(
                            "Move this secret to an environment variable (e.g., .env file) "
                            f"and reference it as {key_pattern.name.upper()}"
                        ),
                        cwe="CWE-798",  # Use of Hard-coded Credentials
                    )
                )

        return findings

# SPDX-License-Identifier: MIT
"""
Container configuration auditor.

Runs a table of presence/absence checks over Dockerfiles and compose files.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from clawscan.core.exceptions import NotReadableError
from clawscan.core.findings import Finding, Severity
from clawscan.scanner.context import ScanContext
from .base import Detector

logger = logging.getLogger(__name__)

NAME = "docker"

DOCKERFILE_NAMES = ("dockerfile",)

COMPOSE_FILE_NAMES = (
    "docker-compose.yml",
    "docker-compose.yaml",
    "compose.yml",
    "compose.yaml",
)


@dataclass(frozen=True)
class DockerCheck:
    """A presence check, optionally cancelled by a mitigation pattern."""

    name: str
    pattern: re.Pattern[str]
    severity: Severity
    title: str
    description: str
    fix: str
    cwe: str
    anti_pattern: Optional[re.Pattern[str]] = None


DOCKERFILE_CHECKS = (
    DockerCheck(
        name="running-as-root",
        pattern=re.compile(r"^FROM\s+", re.MULTILINE),  # is a Dockerfile
        anti_pattern=re.compile(r"^USER\s+(?!root\b)(?!0\b)\w", re.MULTILINE),
        severity=Severity.HIGH,
        title="Dockerfile Runs as Root",
        description="No USER instruction found. Container will run as root by default, increasing attack surface.",
        fix='Add a USER instruction to run as a non-root user: "USER nonroot" or "USER 1000"',
        cwe="CWE-250",
    ),
    DockerCheck(
        name="using-latest-tag",
        pattern=re.compile(r"FROM\s+\S+:latest\b", re.IGNORECASE),
        severity=Severity.MEDIUM,
        title="Using :latest Tag",
        description="Using the :latest tag makes builds non-reproducible and could introduce unexpected changes.",
        fix='Pin to a specific version tag, e.g., "FROM node:20-alpine" instead of "FROM node:latest"',
        cwe="CWE-1357",
    ),
    DockerCheck(
        name="add-instead-of-copy",
        pattern=re.compile(r"^ADD\s+(?!https?:)", re.MULTILINE),
        severity=Severity.LOW,
        title="Using ADD Instead of COPY",
        description=(
            "ADD has extra features (URL fetching, auto-extraction) that could introduce "
            "security issues. COPY is more explicit."
        ),
        fix="Use COPY instead of ADD unless you specifically need URL fetching or auto-extraction.",
        cwe="CWE-829",
    ),
    DockerCheck(
        name="exposed-secrets-in-env",
        pattern=re.compile(
            r"ENV\s+\w*(KEY|TOKEN|SECRET|PASSWORD|CREDENTIAL|AUTH)\w*\s*[=\s]\s*[\"']?[A-Za-z0-9+/=]{16,}",
            re.IGNORECASE,
        ),
        severity=Severity.CRITICAL,
        title="Hardcoded Secret in ENV",
        description=(
            "Dockerfile contains a hardcoded secret in an ENV instruction. "
            "Secrets in Dockerfiles are visible in image layers."
        ),
        fix="Use build arguments (ARG) or runtime environment variables. Never commit secrets to Dockerfiles.",
        cwe="CWE-798",
    ),
    DockerCheck(
        name="curl-bash-pattern",
        pattern=re.compile(r"curl\s+[^|]*\|\s*(ba)?sh", re.IGNORECASE),
        severity=Severity.HIGH,
        title="Curl-Bash Installation Pattern",
        description="Piping curl to bash is dangerous. Downloaded scripts could be tampered with or change unexpectedly.",
        fix="Download the script first, verify its checksum, then execute it.",
        cwe="CWE-829",
    ),
    DockerCheck(
        name="sensitive-copy",
        pattern=re.compile(r"COPY\s+[^\n]*\.(pem|key|crt|env)\b", re.IGNORECASE),
        severity=Severity.HIGH,
        title="Copying Sensitive Files",
        description="Dockerfile copies potentially sensitive files (.pem, .key, .env). These files may contain secrets.",
        fix="Use Docker secrets, environment variables at runtime, or ensure these files are in .dockerignore.",
        cwe="CWE-312",
    ),
)

COMPOSE_CHECKS = (
    DockerCheck(
        name="privileged-mode",
        pattern=re.compile(r"^\s+privileged:\s*true\b", re.MULTILINE),
        severity=Severity.CRITICAL,
        title="Privileged Container Mode",
        description=(
            "A service is running in privileged mode, giving it full access to the host system. "
            "This allows container escape and complete host compromise."
        ),
        fix='Remove "privileged: true" unless absolutely necessary. Use specific capabilities instead with cap_add.',
        cwe="CWE-250",
    ),
    DockerCheck(
        name="docker-socket-mount",
        pattern=re.compile(r"/var/run/docker\.sock"),
        severity=Severity.CRITICAL,
        title="Docker Socket Mount",
        description=(
            "A service mounts the Docker socket (/var/run/docker.sock). "
            "This allows the container to control Docker and escape to the host."
        ),
        fix="Remove the Docker socket mount. If Docker access is needed, use Docker-in-Docker (dind) or a remote Docker host.",
        cwe="CWE-269",
    ),
    DockerCheck(
        name="external-port-binding",
        pattern=re.compile(
            r"ports:\s*\n(?:\s+-\s*[\"']?(?:0\.0\.0\.0:)?(\d+:\d+)[\"']?\s*\n?)+",
            re.MULTILINE,
        ),
        severity=Severity.HIGH,
        title="Externally Exposed Port",
        description=(
            "A service has ports exposed that default to 0.0.0.0 (all interfaces). "
            "This makes it accessible from outside the host."
        ),
        fix='Bind to localhost only: "127.0.0.1:PORT:PORT" or use internal Docker networks.',
        cwe="CWE-668",
    ),
    DockerCheck(
        name="missing-read-only",
        pattern=re.compile(r"^\s+image:", re.MULTILINE),  # has a service definition
        anti_pattern=re.compile(r"^\s+read_only:\s*true\b", re.MULTILINE),
        severity=Severity.HIGH,
        title="Missing Read-Only Filesystem",
        description=(
            "Services do not have read_only: true. An attacker could write malicious files "
            "if a container is compromised."
        ),
        fix='Add "read_only: true" to services. Use tmpfs for directories that need writes (e.g., /tmp, /var/run).',
        cwe="CWE-732",
    ),
    DockerCheck(
        name="missing-security-opt",
        pattern=re.compile(r"^\s+image:", re.MULTILINE),
        anti_pattern=re.compile(r"no-new-privileges:\s*true", re.MULTILINE),
        severity=Severity.MEDIUM,
        title="Missing No-New-Privileges",
        description=(
            "Services are missing the no-new-privileges security option. "
            "Processes could escalate privileges using setuid binaries."
        ),
        fix='Add "security_opt: [no-new-privileges:true]" to services.',
        cwe="CWE-269",
    ),
    DockerCheck(
        name="sensitive-volume-mount",
        pattern=re.compile(r"~/\.[a-z]+|/root/|/home/\w+/\.[a-z]+|/etc/(?!localtime|timezone)"),
        severity=Severity.HIGH,
        title="Sensitive Directory Mounted",
        description=(
            "A sensitive directory (home dotfiles, /root, /etc) is mounted. "
            "Container compromise could access or modify host files."
        ),
        fix="Use granular mounts for specific files needed, and mount as read-only (:ro) where possible.",
        cwe="CWE-732",
    ),
    DockerCheck(
        name="using-latest-tag",
        pattern=re.compile(r"image:\s*\S+:latest\b", re.IGNORECASE),
        severity=Severity.MEDIUM,
        title="Using :latest Tag",
        description="Using the :latest tag makes builds non-reproducible and could introduce unexpected changes.",
        fix='Pin to a specific version tag, e.g., "image: node:20-alpine" instead of "image: node:latest"',
        cwe="CWE-1357",
    ),
)


def checks_for(file_name: str) -> Sequence[DockerCheck]:
    """Pick the check table for a basename, or an empty tuple."""
    lowered = file_name.lower()
    if lowered in DOCKERFILE_NAMES:
        return DOCKERFILE_CHECKS
    if lowered in COMPOSE_FILE_NAMES:
        return COMPOSE_CHECKS
    return ()


class DockerDetector(Detector):
    """Detects security misconfigurations in Docker and docker-compose files."""

    file_patterns = ("**/Dockerfile", "**/dockerfile") + tuple(f"**/{f}" for f in COMPOSE_FILE_NAMES)

    @property
    def name(self) -> str:
        return NAME

    @property
    def description(self) -> str:
        return "Detects security misconfigurations in Docker and docker-compose files"

    def scan(self, context: ScanContext) -> List[Finding]:
        findings: List[Finding] = []

        for file_path in context.files:
            checks = checks_for(file_path.rsplit("/", 1)[-1])
            if not checks:
                continue
            try:
                content = context.read_file(file_path)
            except NotReadableError as e:
                logger.debug("docker: %s", e)
                continue
            findings.extend(self.scan_with_checks(file_path, content, checks))

        return findings

    def scan_with_checks(
        self, file_path: str, content: str, checks: Sequence[DockerCheck]
    ) -> List[Finding]:
        findings: List[Finding] = []
        lines = content.split("\n")

        for check in checks:
            if not check.pattern.search(content):
                continue
            # Mitigation present
            if check.anti_pattern is not None and check.anti_pattern.search(content):
                continue

            line_number = 1
            for i, line in enumerate(lines):
                if check.pattern.search(line):
                    line_number = i + 1
                    break

            findings.append(
                Finding(
                    scanner=NAME,
                    severity=check.severity,
                    title=check.title,
                    description=check.description,
                    file=file_path,
                    line=line_number,
                    fix=check.fix,
                    cwe=check.cwe,
                )
            )

        return findings

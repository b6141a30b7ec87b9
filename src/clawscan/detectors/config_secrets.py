# SPDX-License-Identifier: MIT
"""
Structured-config secret detector.

Parses known config files, walks every string value by its path and checks
it against the credential catalog and a key-name/format heuristic.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, FrozenSet, List, Tuple

import yaml

from clawscan.core.exceptions import NotReadableError
from clawscan.core.findings import Finding, Severity
from clawscan.core.redaction import mask_secret
from clawscan.scanner.context import ScanContext
from .api_keys import KEY_PATTERNS
from .base import Detector

logger = logging.getLogger(__name__)

NAME = "config-secrets"

JSON_CONFIG_FILES = (
    "openclaw.json",
    "config.json",
    "settings.json",
    "credentials.json",
    "secrets.json",
    ".clawrc",
    ".clawrc.json",
)

YAML_CONFIG_FILES = (
    "config.yaml",
    "config.yml",
    "secrets.yaml",
    "secrets.yml",
)

CONFIG_FILES = JSON_CONFIG_FILES + YAML_CONFIG_FILES

MIN_VALUE_LENGTH = 10

PLACEHOLDERS = (
    re.compile(r"^your[_-]", re.IGNORECASE),
    re.compile(r"xxx+", re.IGNORECASE),
    re.compile(r"placeholder", re.IGNORECASE),
    re.compile(r"example", re.IGNORECASE),
    re.compile(r"test[_-]?key", re.IGNORECASE),
    re.compile(r"dummy", re.IGNORECASE),
    re.compile(r"fake", re.IGNORECASE),
    re.compile(r"sample", re.IGNORECASE),
    re.compile(r"\$\{.*\}"),  # ${VAR} template
    re.compile(r"\{\{.*\}\}"),  # {{VAR}} template
    re.compile(r"^<.*>$"),
    re.compile(r"^TODO", re.IGNORECASE),
    re.compile(r"^FIXME", re.IGNORECASE),
    re.compile(r"^CHANGE[_-]?ME", re.IGNORECASE),
    re.compile(r"^INSERT[_-]", re.IGNORECASE),
    re.compile(r"^PUT[_-]", re.IGNORECASE),
    re.compile(r"^REPLACE[_-]", re.IGNORECASE),
)

SENSITIVE_KEY_PATTERNS = (
    re.compile(r"key$", re.IGNORECASE),
    re.compile(r"token$", re.IGNORECASE),
    re.compile(r"secret", re.IGNORECASE),
    re.compile(r"password", re.IGNORECASE),
    re.compile(r"credential", re.IGNORECASE),
    re.compile(r"api[_-]?key", re.IGNORECASE),
    re.compile(r"auth", re.IGNORECASE),
    re.compile(r"^sk[_-]", re.IGNORECASE),
    re.compile(r"^pk[_-]", re.IGNORECASE),
    re.compile(r"bearer", re.IGNORECASE),
    re.compile(r"oauth", re.IGNORECASE),
    re.compile(r"jwt", re.IGNORECASE),
    re.compile(r"private", re.IGNORECASE),
    re.compile(r"signing", re.IGNORECASE),
)

# Catalog entries reported as critical when found in a config file
CRITICAL_PATTERNS = {
    "openRouter",
    "openAI",
    "anthropic",
    "slackBotToken",
    "slackAppToken",
    "awsAccessKey",
    "githubToken",
    "stripeKey",
    "mongodbUri",
    "postgresUri",
    "privateKey",
}


def is_placeholder(value: str) -> bool:
    return any(p.search(value) for p in PLACEHOLDERS)


def is_sensitive_key(key: str) -> bool:
    return any(p.search(key) for p in SENSITIVE_KEY_PATTERNS)


def looks_like_secret(value: str) -> bool:
    """Format heuristic for values that may be secrets of unknown shape."""
    if len(value) < 16:
        return False

    alnum = sum(1 for c in value if c.isascii() and c.isalnum())
    if alnum / len(value) < 0.7:
        return False

    # URLs and paths
    if "://" in value or value.startswith("/") or ".." in value:
        return False

    has_upper = re.search(r"[A-Z]", value) is not None
    has_lower = re.search(r"[a-z]", value) is not None
    has_digit = re.search(r"[0-9]", value) is not None

    return (has_upper and has_lower) or (has_digit and len(value) >= 20)


def extract_strings(obj: Any, path: str = "") -> List[Tuple[str, str]]:
    """Flatten *obj* into ``(path, value)`` pairs for every string it holds.

    Walks with an explicit stack, so nesting depth is bounded by the parser
    alone. A container that appears inside itself (a recursive YAML alias)
    is not entered again.

    >>> extract_strings({"keys": ["a", {"token": "b"}]})
    [('keys[0]', 'a'), ('keys[1].token', 'b')]
    """
    results: List[Tuple[str, str]] = []
    # (node, path, ids of the containers above it)
    stack: List[Tuple[Any, str, FrozenSet[int]]] = [(obj, path, frozenset())]

    while stack:
        node, node_path, ancestors = stack.pop()
        if isinstance(node, str):
            results.append((node_path, node))
            continue

        if isinstance(node, (list, tuple)):
            children = [(item, f"{node_path}[{index}]") for index, item in enumerate(node)]
        elif isinstance(node, dict):
            children = [
                (value, f"{node_path}.{key}" if node_path else str(key))
                for key, value in node.items()
            ]
        else:
            continue

        if id(node) in ancestors:
            continue
        inner = ancestors | {id(node)}
        for child, child_path in reversed(children):
            stack.append((child, child_path, inner))

    return results


def severity_for(pattern_name: str) -> Severity:
    return Severity.CRITICAL if pattern_name in CRITICAL_PATTERNS else Severity.HIGH


def find_line_number(content: str, value: str) -> int:
    index = content.find(value)
    if index == -1:
        return 1
    return content.count("\n", 0, index) + 1


def parse_config(file_name: str, content: str) -> Any:
    """Parse *content* as YAML or JSON depending on *file_name*.

    Raises:
        ValueError: content is not valid for its format
        RecursionError: content is nested deeper than the parser can follow
    """
    if file_name in YAML_CONFIG_FILES:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(str(e)) from e
    return json.loads(content)


class ConfigSecretsDetector(Detector):
    """Detects secrets embedded in configuration files."""

    file_patterns = tuple(f"**/{f}" for f in CONFIG_FILES)

    @property
    def name(self) -> str:
        return NAME

    @property
    def description(self) -> str:
        return "Detects secrets embedded in configuration files"

    def scan(self, context: ScanContext) -> List[Finding]:
        findings: List[Finding] = []

        for file_path in context.files:
            file_name = file_path.rsplit("/", 1)[-1]
            if file_name not in CONFIG_FILES:
                continue

            try:
                content = context.read_file(file_path)
            except NotReadableError as e:
                logger.debug("config-secrets: %s", e)
                continue

            findings.extend(self.scan_config_file(file_path, content))

        return findings

    def scan_config_file(self, file_path: str, content: str) -> List[Finding]:
        findings: List[Finding] = []
        file_name = file_path.rsplit("/", 1)[-1]

        try:
            config = parse_config(file_name, content)
        except (ValueError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError too
            logger.debug("config-secrets: skipping unparsable %s: %s", file_path, e)
            return findings

        reported = set()

        for path, value in extract_strings(config):
            if len(value) < MIN_VALUE_LENGTH or is_placeholder(value):
                continue

            masked = mask_secret(value)
            line = find_line_number(content, value)

            for key_pattern in KEY_PATTERNS:
                if not key_pattern.pattern.search(value):
                    continue
                findings.append(
                    Finding(
                        scanner=NAME,
                        severity=severity_for(key_pattern.name),
                        title=f"{key_pattern.service} API Key in Config File",
                        description=(
                            f"Found a {key_pattern.service} API key embedded in configuration "
                            f'file at path "{path}". Secrets should not be stored in config '
                            "files that may be committed to version control."
                        ),
                        file=file_path,
                        line=line,
                        match=masked,
                        fix=(
                            "Move this secret to a .env file and reference it using environment "
                            'variable substitution, e.g. "${OPENROUTER_API_KEY}".'
                        ),
                        cwe="CWE-312",  # Cleartext Storage of Sensitive Information
                    )
                )
                reported.add(masked)
                break

            key_name = path.rsplit(".", 1)[-1]
            if not (is_sensitive_key(key_name) and looks_like_secret(value)):
                continue
            if masked in reported:
                continue

            findings.append(
                Finding(
                    scanner=NAME,
                    severity=Severity.HIGH,
                    title=f"Potential Secret in Config: {key_name}",
                    description=(
                        f'Found a value at "{path}" that appears to be a secret based on its '
                        "key name and format. Review if this should be moved to environment "
                        "variables."
                    ),
                    file=file_path,
                    line=line,
                    match=masked,
                    fix="Move this secret to a .env file and reference it using environment variable substitution.",
                    cwe="CWE-312",
                )
            )
            reported.add(masked)

        return findings

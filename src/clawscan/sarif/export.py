# SPDX-License-Identifier: MIT
from __future__ import annotations

import os
import re
from datetime import datetime, timezone
from typing import Dict, Any

from clawscan import __version__
from clawscan.core.findings import Finding, ScanResult, Severity

INFORMATION_URI = "https://github.com/anoopkansupada/clawscan"

SARIF_LEVELS = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "note",
    Severity.INFO: "note",
}

SECURITY_SEVERITY = {
    Severity.CRITICAL: "9.0",
    Severity.HIGH: "7.0",
    Severity.MEDIUM: "5.0",
    Severity.LOW: "3.0",
    Severity.INFO: "1.0",
}


_WHITESPACE = re.compile(r"\s+")


def rule_id(finding: Finding) -> str:
    slug = _WHITESPACE.sub("-", finding.title.lower())
    return f"{finding.scanner}/{slug}"


def build_sarif(result: ScanResult) -> Dict[str, Any]:
    # Collect rules by id, first finding wins
    rule_ids = {}
    rules = []
    for f in result.findings:
        rid = rule_id(f)
        if rid in rule_ids:
            continue
        rule_ids[rid] = len(rules)
        help_text = f.fix or "No fix suggestion available."
        tags = ["security"]
        if f.cwe:
            tags.append(f"external/cwe/{f.cwe.replace('CWE-', '')}")
        rules.append(
            {
                "id": rid,
                "name": f.title,
                "shortDescription": {"text": f.title},
                "fullDescription": {"text": f.description},
                "help": {"text": help_text, "markdown": f"**Fix:** {help_text}"},
                "properties": {
                    "security-severity": SECURITY_SEVERITY[f.severity],
                    "tags": tags,
                },
            }
        )

    results = []
    for f in result.findings:
        rid = rule_id(f)
        sarif_result = {
            "ruleId": rid,
            "ruleIndex": rule_ids[rid],
            "level": SARIF_LEVELS[f.severity],
            "message": {"text": f.description},
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {"uri": f.file, "uriBaseId": "%SRCROOT%"},
                        "region": {
                            "startLine": max(1, f.line or 1),
                            "startColumn": max(1, f.column or 1),
                        },
                    }
                }
            ],
        }
        if f.fix:
            sarif_result["fixes"] = [{"description": {"text": f.fix}}]
        results.append(sarif_result)

    # Make this upload unique per job by setting automationDetails.id
    auto_id = "clawscan-{run}-{job}-{attempt}".format(
        run=os.getenv("GITHUB_RUN_ID", "local"),
        job=os.getenv("GITHUB_JOB", "job"),
        attempt=os.getenv("GITHUB_RUN_ATTEMPT", "1"),
    )

    return {
        "version": "2.1.0",
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "runs": [
            {
                "automationDetails": {"id": auto_id},
                "tool": {
                    "driver": {
                        "name": "ClawScan",
                        "version": __version__,
                        "informationUri": INFORMATION_URI,
                        "rules": rules,
                    }
                },
                "results": results,
                "invocations": [
                    {
                        "executionSuccessful": True,
                        "endTimeUtc": datetime.now(timezone.utc).isoformat(),
                    }
                ],
            }
        ],
    }

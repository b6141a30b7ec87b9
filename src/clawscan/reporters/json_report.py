"""Machine-readable JSON report."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from clawscan import __version__
from clawscan.core.findings import ScanResult


class JsonReporter:
    name = "json"

    def report(self, result: ScanResult) -> str:
        output = {
            "version": __version__,
            "scanner": "ClawScan",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **result.to_dict(),
        }
        return json.dumps(output, indent=2)

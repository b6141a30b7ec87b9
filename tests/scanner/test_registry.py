# SPDX-License-Identifier: MIT
"""Detector registry behaviour."""

import pytest

from clawscan.core.exceptions import UnknownScannerError
from clawscan.core.findings import Finding, Severity
from clawscan.detectors import (
    Detector,
    DetectorRegistry,
    default_detectors,
    get_detector_registry,
)


class StubDetector(Detector):
    def __init__(self, name):
        self._name = name

    @property
    def name(self):
        return self._name

    @property
    def description(self):
        return f"stub {self._name}"

    def scan(self, context):
        return [
            Finding(
                scanner=self._name,
                severity=Severity.INFO,
                title="Stub",
                description="stub finding",
                file="x",
            )
        ]


def test_default_names_in_run_order():
    registry = DetectorRegistry(default_detectors())
    assert registry.names() == ["api-keys", "config-secrets", "docker", "gitignore"]


def test_global_registry_is_shared():
    assert get_detector_registry() is get_detector_registry()


def test_duplicate_name_rejected():
    registry = DetectorRegistry([StubDetector("one")])
    with pytest.raises(ValueError, match="Duplicate detector: one"):
        registry.register(StubDetector("one"))


def test_select_keeps_caller_order():
    registry = DetectorRegistry([StubDetector("a"), StubDetector("b"), StubDetector("c")])

    assert [d.name for d in registry.select(["c", "a"])] == ["c", "a"]
    assert [d.name for d in registry.select(None)] == ["a", "b", "c"]
    assert registry.select([]) == []


def test_unknown_name_lists_available():
    registry = DetectorRegistry([StubDetector("a"), StubDetector("b")])

    with pytest.raises(UnknownScannerError) as exc:
        registry.get("zzz")
    assert "Unknown scanner: zzz" in str(exc.value)
    assert "a, b" in str(exc.value)


def test_custom_registry_drives_scan(tmp_path):
    from clawscan import scan

    (tmp_path / "file.txt").write_text("hello\n")
    result = scan(tmp_path, registry=DetectorRegistry([StubDetector("stub")]))

    assert [f.scanner for f in result.findings] == ["stub"]
    assert result.summary["info"] == 1

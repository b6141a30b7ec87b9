# SPDX-License-Identifier: MIT
"""Detector registry and discovery for ClawScan."""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from clawscan.core.exceptions import UnknownScannerError
from .base import Detector
from .api_keys import ApiKeysDetector
from .config_secrets import ConfigSecretsDetector
from .docker import DockerDetector
from .gitignore import GitignoreDetector


class DetectorRegistry:
    """Light-weight container keeping detector instances in run order."""

    def __init__(self, detectors: Optional[Iterable[Detector]] = None) -> None:
        self._detectors: Dict[str, Detector] = {}
        for detector in detectors or ():
            self.register(detector)

    def register(self, detector: Detector) -> None:
        """Add *detector* to the registry.

        Duplicate names fail fast rather than silently overriding.
        """
        if detector.name in self._detectors:
            raise ValueError(f"Duplicate detector: {detector.name}")
        self._detectors[detector.name] = detector

    def detectors(self) -> List[Detector]:
        """Return the registered detectors in registration order."""
        return list(self._detectors.values())

    def names(self) -> List[str]:
        return list(self._detectors)

    def get(self, name: str) -> Detector:
        try:
            return self._detectors[name]
        except KeyError:
            raise UnknownScannerError(
                f"Unknown scanner: {name}. Available scanners: {', '.join(self._detectors)}"
            ) from None

    def select(self, names: Optional[Iterable[str]] = None) -> List[Detector]:
        """Detectors for *names* in the caller's order, or all when ``None``."""
        if names is None:
            return self.detectors()
        return [self.get(name) for name in names]


def default_detectors() -> List[Detector]:
    """Built-in detectors in default run order."""
    return [
        ApiKeysDetector(),
        ConfigSecretsDetector(),
        DockerDetector(),
        GitignoreDetector(),
    ]


# Global registry instance
_registry = None


def get_detector_registry() -> DetectorRegistry:
    """Get the global detector registry."""
    global _registry
    if _registry is None:
        _registry = DetectorRegistry(default_detectors())
    return _registry


__all__ = [
    "Detector",
    "DetectorRegistry",
    "ApiKeysDetector",
    "ConfigSecretsDetector",
    "DockerDetector",
    "GitignoreDetector",
    "default_detectors",
    "get_detector_registry",
]

# SPDX-License-Identifier: MIT
"""File discovery with exclusion rules."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional, Callable

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDES = (
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    "coverage",
    "__pycache__",
    ".venv",
    "venv",
    "*.lock",
    "*.lockb",
)


def _compile_exclude(pattern: str) -> Callable[[str, str], bool]:
    """Build a ``(name, rel_path) -> bool`` test for one exclusion pattern."""
    if "*" in pattern:
        regex = re.compile(
            "^" + ".*".join(re.escape(part) for part in pattern.split("*")) + "$"
        )
        return lambda name, rel_path: regex.match(name) is not None
    return lambda name, rel_path: name == pattern or pattern in rel_path


def discover_files(
    root: Path | str,
    excludes: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Recursively list files under *root*, relative to it, in POSIX form.

    Each entry's bare name is tested against every exclusion pattern:
    wildcard patterns match the whole name, plain patterns match the exact
    name or any substring of the relative path. Excluded directories are
    not walked.

    Args:
        root: Directory to walk
        excludes: Exclusion patterns; ``None`` uses :data:`DEFAULT_EXCLUDES`

    Returns:
        Sorted-walk list of relative file paths
    """
    root_path = Path(root)
    patterns = DEFAULT_EXCLUDES if excludes is None else tuple(excludes)
    tests = [_compile_exclude(p) for p in patterns if p]
    files: List[str] = []

    def walk(current: Path, rel_prefix: str) -> None:
        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", current, e)
            return

        for entry in entries:
            rel_path = f"{rel_prefix}{entry.name}"
            if any(test(entry.name, rel_path) for test in tests):
                continue
            try:
                if entry.is_dir(follow_symlinks=False):
                    walk(Path(entry.path), rel_path + "/")
                elif entry.is_file():
                    files.append(rel_path)
            except OSError as e:
                logger.debug("Skipping %s: %s", rel_path, e)

    walk(root_path, "")
    return files

# SPDX-License-Identifier: MIT
"""Read-only filesystem view handed to every detector."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Tuple

from clawscan.core.exceptions import NotReadableError


class ScanContext:
    """
    Facade over the scan root exposing the discovered files.

    Reads are not cached; each call touches the filesystem again.
    """

    def __init__(self, root: Path | str, files: Iterable[str]) -> None:
        self._root = Path(root)
        self._files: Tuple[str, ...] = tuple(files)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def files(self) -> Tuple[str, ...]:
        return self._files

    def read_file(self, path: str) -> str:
        """
        Return the UTF-8 text of *path* (relative to the root).

        Raises:
            NotReadableError: missing file, permission error, NUL bytes or
                invalid UTF-8
        """
        full_path = self._root / path
        try:
            data = full_path.read_bytes()
        except OSError as e:
            raise NotReadableError(path, e.strerror or str(e)) from e

        # Heuristic: any NUL byte means binary
        if b"\x00" in data:
            raise NotReadableError(path, "binary content")
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise NotReadableError(path, "not valid UTF-8 text") from e

    def file_exists(self, path: str) -> bool:
        return (self._root / path).exists()

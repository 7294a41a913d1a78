"""Recursive discovery of package files under the static root.

The walk is best-effort: an unreadable directory or an entry whose
metadata cannot be read is logged and skipped, and the scan returns
whatever it collected.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pkgsender.domain.models import PackageDescriptor

logger = logging.getLogger(__name__)

PACKAGE_EXTENSION = ".pkg"

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


class ScanEntryError(Exception):
    """Raised when a single directory or file cannot be inspected."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Error accessing {path}: {reason}")
        self.path = path
        self.reason = reason


def human_size(num_bytes: int) -> str:
    """Render a byte count with base-1024 units, e.g. ``'1.5 KB'``."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    value = float(num_bytes)
    for unit in _SIZE_UNITS[1:]:
        value /= 1024.0
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            break
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {unit}"


class PackageScanner:
    """Walks a root directory depth-first and collects ``.pkg`` files.

    Entries are visited in directory enumeration order, so the result is
    not sorted. Directories already seen during the current scan (by
    device and inode) are not entered again, which bounds the walk when
    symlinks form a cycle.
    """

    def __init__(self, root: Path | str) -> None:
        self._root = Path(os.path.abspath(root))

    @property
    def root(self) -> Path:
        return self._root

    def scan(self) -> list[PackageDescriptor]:
        """Return a descriptor for every package file under the root."""
        found: list[PackageDescriptor] = []
        visited: set[tuple[int, int]] = set()
        self._walk(str(self._root), found, visited)
        logger.debug("Scan of %s found %d package(s)", self._root, len(found))
        return found

    def _walk(
        self,
        directory: str,
        found: list[PackageDescriptor],
        visited: set[tuple[int, int]],
    ) -> None:
        try:
            st = os.stat(directory)
            key = (st.st_dev, st.st_ino)
            if key in visited:
                logger.debug("Skipping already visited directory %s", directory)
                return
            visited.add(key)
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.warning("Error reading directory %s: %s", directory, e)
            return

        for entry in entries:
            try:
                if self._is_dir(entry):
                    self._walk(entry.path, found, visited)
                elif os.path.splitext(entry.name)[1].lower() == PACKAGE_EXTENSION:
                    found.append(self._describe(entry))
            except ScanEntryError as e:
                logger.warning("%s", e)

    @staticmethod
    def _is_dir(entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir()
        except OSError as e:
            raise ScanEntryError(entry.path, str(e)) from e

    @staticmethod
    def _describe(entry: os.DirEntry) -> PackageDescriptor:
        try:
            if not entry.is_file():
                raise ScanEntryError(entry.path, "not a regular file")
            size = entry.stat().st_size
        except OSError as e:
            raise ScanEntryError(entry.path, str(e)) from e
        try:
            entry.path.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ScanEntryError(ascii(entry.path), "file name is not valid UTF-8") from e
        filepath = os.path.abspath(entry.path)
        return PackageDescriptor(
            filepath=filepath,
            directory=os.path.dirname(filepath),
            name=entry.name,
            size=size,
            size_display=human_size(size),
        )

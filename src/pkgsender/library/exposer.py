"""Registry of directories whose files are served by basename.

Each install exposes the directory holding the chosen package so the
console can fetch it at ``http://<local ip>:<port>/<basename>``. The
registry only grows for the lifetime of the process.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

logger = logging.getLogger(__name__)


class ExposedDirectories:
    """Append-only, thread-safe, ordered set of served directories.

    Lookups walk the directories in registration order and return the
    first one that holds a regular file with the requested name.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._directories: list[Path] = []

    def expose(self, directory: Path | str) -> None:
        """Start serving files from ``directory``. Repeated calls are no-ops."""
        path = Path(os.path.abspath(directory))
        with self._lock:
            if path in self._directories:
                return
            self._directories.append(path)
        logger.info("Now serving files from %s", path)

    @property
    def directories(self) -> tuple[Path, ...]:
        with self._lock:
            return tuple(self._directories)

    def find(self, filename: str) -> Path | None:
        """Return the served file named ``filename``, or None.

        Only bare basenames are looked up; anything containing a path
        separator or naming a parent directory is never resolved.
        """
        if (
            not filename
            or filename in (".", "..")
            or "/" in filename
            or "\\" in filename
            or "\x00" in filename
        ):
            return None
        for directory in self.directories:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._directories)

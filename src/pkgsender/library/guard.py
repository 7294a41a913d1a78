"""Validation of user-supplied package paths.

A path is accepted only if it resolves under the static root and names
an existing file. Containment is checked with a plain string prefix test
on the resolved paths, so a sibling directory whose name starts with the
root's name (``/data/pkgs-extra`` for root ``/data/pkgs``) also passes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class PathRejectedError(Exception):
    """Base class for rejected install paths.

    Attributes:
        status_code: HTTP status the rejection maps to.
    """

    status_code = 400

    def __init__(self, message: str, raw_path: object = None) -> None:
        super().__init__(message)
        self.message = message
        self.raw_path = raw_path


class InvalidPathError(PathRejectedError):
    status_code = 400

    def __init__(self, raw_path: object = None) -> None:
        super().__init__("Invalid filepath", raw_path)


class AccessDeniedError(PathRejectedError):
    status_code = 403

    def __init__(self, raw_path: object = None) -> None:
        super().__init__("Access denied: Invalid file path", raw_path)


class PackageNotFoundError(PathRejectedError):
    status_code = 404

    def __init__(self, raw_path: object = None) -> None:
        super().__init__("File not found", raw_path)


def validate_path(raw_path: object, root: Path | str) -> Path:
    """Resolve ``raw_path`` and check it is an existing file under ``root``.

    Relative paths resolve against the current working directory. ``.``
    and ``..`` segments are collapsed lexically; symlinks are not followed.

    Returns:
        The resolved absolute path.

    Raises:
        InvalidPathError: ``raw_path`` is empty or not a string.
        AccessDeniedError: The resolved path does not start with the root.
        PackageNotFoundError: Nothing exists at the resolved path, or it
            is not a regular file.
    """
    if not raw_path or not isinstance(raw_path, str):
        raise InvalidPathError(raw_path)

    resolved = os.path.abspath(raw_path)
    resolved_root = os.path.abspath(root)

    if not resolved.startswith(resolved_root):
        logger.warning("Path traversal attempt blocked: %r", raw_path)
        raise AccessDeniedError(raw_path)

    if not os.path.isfile(resolved):
        raise PackageNotFoundError(raw_path)

    return Path(resolved)

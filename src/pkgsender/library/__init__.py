"""Local package library: scanning, path validation and static exposure."""

from pkgsender.library.exposer import ExposedDirectories
from pkgsender.library.guard import (
    AccessDeniedError,
    InvalidPathError,
    PackageNotFoundError,
    PathRejectedError,
    validate_path,
)
from pkgsender.library.scanner import PackageScanner, ScanEntryError, human_size

__all__ = [
    "AccessDeniedError",
    "ExposedDirectories",
    "InvalidPathError",
    "PackageNotFoundError",
    "PackageScanner",
    "PathRejectedError",
    "ScanEntryError",
    "human_size",
    "validate_path",
]

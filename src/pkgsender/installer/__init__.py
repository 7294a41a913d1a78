"""Remote install backends for pkgsender.

Provides the abstract PackageInstaller interface and the HTTP backend
that talks to the console's install API.
"""

from pkgsender.installer.base import (
    PackageInstaller,
    RemoteInstallError,
    RemoteInstallTimeout,
)
from pkgsender.installer.http_backend import HttpPackageInstaller

__all__ = [
    "HttpPackageInstaller",
    "PackageInstaller",
    "RemoteInstallError",
    "RemoteInstallTimeout",
]

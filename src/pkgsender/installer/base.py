"""Abstract base class for remote package installers.

The web frontend only depends on this interface, so tests and
alternative transports can stand in for the console's HTTP API.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class PackageInstaller(ABC):
    """Asks a remote device to download and install a package.

    Example usage::

        async with HttpPackageInstaller(device_host="192.168.1.50", ...) as inst:
            message = await inst.install("game.pkg")
    """

    @abstractmethod
    async def connect(self) -> None:
        """Prepare the transport. Must be called before ``install``."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the transport. Safe to call more than once."""
        ...

    @abstractmethod
    async def install(self, filename: str) -> str:
        """Request installation of ``filename`` as served by this machine.

        Args:
            filename: Basename of a file currently exposed for download.

        Returns:
            A human-readable success message including the device's reply.

        Raises:
            RemoteInstallError: If the device rejects the request or
                cannot be reached.
        """
        ...

    async def __aenter__(self) -> PackageInstaller:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()


class RemoteInstallError(Exception):
    """Raised when the remote install request fails.

    Attributes:
        status_code: HTTP status returned by the device, if it answered.
        body: Raw response text, if the device answered.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RemoteInstallTimeout(RemoteInstallError):
    """Raised when the device does not answer within the configured timeout."""

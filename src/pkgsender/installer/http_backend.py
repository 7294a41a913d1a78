"""HTTP install backend.

Posts a ``direct`` install request to the console's install API, pointing
it at the package URL served by this machine.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from pkgsender.installer.base import (
    PackageInstaller,
    RemoteInstallError,
    RemoteInstallTimeout,
)

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_PORT = 12800
INSTALL_API_PATH = "/api/install"

# Characters left unescaped in the package URL, besides letters, digits and "_.-~"
URL_SAFE_CHARS = "!*'()"


class HttpPackageInstaller(PackageInstaller):
    """Sends install requests to the console's HTTP API."""

    def __init__(
        self,
        device_host: str,
        local_host: str,
        local_port: int,
        device_port: int = DEFAULT_DEVICE_PORT,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._device_host = device_host
        self._local_host = local_host
        self._local_port = local_port
        self._device_port = device_port
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def api_url(self) -> str:
        return f"http://{self._device_host}:{self._device_port}{INSTALL_API_PATH}"

    def package_url(self, filename: str) -> str:
        """URL at which the device can download ``filename`` from this machine."""
        return f"http://{self._local_host}:{self._local_port}/{quote(filename, safe=URL_SAFE_CHARS)}"

    async def connect(self) -> None:
        """Create the HTTP client."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        )
        logger.debug("Install client ready for %s", self.api_url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Install client closed")

    async def install(self, filename: str) -> str:
        """POST the install request and wait for the full reply."""
        if self._client is None:
            raise RemoteInstallError("Installer is not connected")

        pkg_url = self.package_url(filename)
        payload = {"type": "direct", "packages": [pkg_url]}

        logger.info("Sending install request to %s", self.api_url)
        logger.info("Package URL: %s", pkg_url)

        try:
            resp = await self._client.post(self.api_url, json=payload)
        except httpx.TimeoutException as e:
            raise RemoteInstallTimeout(
                f"PS4 API timed out after {self._timeout:g}s: {e}"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteInstallError(f"PS4 API request failed: {e}") from e

        text = resp.text
        if not resp.is_success:
            raise RemoteInstallError(
                f"PS4 API error ({resp.status_code}): {text}",
                status_code=resp.status_code,
                body=text,
            )

        return (
            "Request sent successfully!\n\n"
            f"Package: {filename}\n"
            f"URL: {pkg_url}\n\n"
            f"PS4 Response: {text}"
        )

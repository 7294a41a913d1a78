"""Shared test fixtures for the pkgsender test suite.

Provides a small package tree on disk, matching settings, and a fake
console install API built on httpx.MockTransport.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Iterator

import httpx
import pytest

from pkgsender.config.settings import Settings
from pkgsender.installer.http_backend import HttpPackageInstaller

LOCAL_IP = "192.168.1.10"
DEVICE_IP = "192.168.1.50"
PORT = 8080


# ---------------------------------------------------------------------------
# Filesystem Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pkg_root(tmp_path: Path) -> Path:
    """A package root holding a.pkg (10 B), sub/b.PKG (2 KB) and a non-package."""
    root = tmp_path / "pkgs"
    (root / "sub").mkdir(parents=True)
    (root / "a.pkg").write_bytes(b"x" * 10)
    (root / "sub" / "b.PKG").write_bytes(b"y" * 2048)
    (root / "readme.txt").write_text("not a package")
    return root


@pytest.fixture
def settings(pkg_root: Path) -> Settings:
    """Settings pointing at the sample package root."""
    return Settings(
        PORT=PORT,
        STATIC_FILES=str(pkg_root),
        PS4IP=DEVICE_IP,
        LOCALIP=LOCAL_IP,
    )


# ---------------------------------------------------------------------------
# Fake Console
# ---------------------------------------------------------------------------


class FakeConsole:
    """Records install requests and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = "done"
        self.error: Callable[[httpx.Request], Exception] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def console() -> FakeConsole:
    return FakeConsole()


@pytest.fixture
def installer(console: FakeConsole) -> HttpPackageInstaller:
    """An HttpPackageInstaller wired to the fake console."""
    return HttpPackageInstaller(
        device_host=DEVICE_IP,
        local_host=LOCAL_IP,
        local_port=PORT,
        timeout=5.0,
        transport=httpx.MockTransport(console.handler),
    )


# ---------------------------------------------------------------------------
# Logging Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def restore_loggers() -> Iterator[None]:
    """Undo handler and level changes made by setup_logging during a test."""
    saved = {}
    for name in ("pkgsender", "uvicorn"):
        target = logging.getLogger(name)
        saved[name] = (list(target.handlers), target.level)
    yield
    for name, (handlers, level) in saved.items():
        target = logging.getLogger(name)
        for handler in target.handlers:
            if handler not in handlers:
                handler.close()
        target.handlers = handlers
        target.setLevel(level)

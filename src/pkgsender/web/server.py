"""FastAPI application for the package sender.

Routes:

    GET  /health      -> {"status": "healthy", "timestamp": "..."}
    GET  /            -> HTML listing of every .pkg file under the root
    POST /install     <- form field ``filepath``
    GET  /{filename}  -> a file from one of the exposed directories
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI, Form, Request
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from pkgsender import __version__
from pkgsender.config.settings import Settings
from pkgsender.domain.models import InstallOutcome
from pkgsender.installer.base import PackageInstaller, RemoteInstallError
from pkgsender.installer.http_backend import HttpPackageInstaller
from pkgsender.library.exposer import ExposedDirectories
from pkgsender.library.guard import PathRejectedError, validate_path
from pkgsender.library.scanner import PackageScanner

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: str


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_app(
    settings: Settings,
    installer: PackageInstaller | None = None,
    exposed: ExposedDirectories | None = None,
) -> FastAPI:
    """Create the package sender application.

    Args:
        settings: Loaded configuration.
        installer: Optional pre-configured installer (for testing). By
            default an HttpPackageInstaller is built from ``settings``.
        exposed: Optional registry of served directories (for testing).
    """
    if installer is None:
        installer = HttpPackageInstaller(
            device_host=settings.ps4_ip,
            local_host=settings.local_ip,
            local_port=settings.port,
            device_port=settings.device_port,
            timeout=settings.install_timeout,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.installer.connect()
        logger.info("PKG sender listening on port %d", settings.port)
        logger.info("Serving files from: %s", settings.static_files)
        logger.info("Local IP: %s, PS4 IP: %s", settings.local_ip, settings.ps4_ip)
        yield
        await app.state.installer.disconnect()
        logger.info("PKG sender stopped")

    app = FastAPI(
        title="pkgsender",
        description="Send .pkg files from this machine to a console for installation",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.installer = installer
    app.state.exposed = exposed if exposed is not None else ExposedDirectories()
    app.state.scanner = PackageScanner(settings.static_files)

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    @app.get("/health")
    async def health_check() -> HealthResponse:
        return HealthResponse(status="healthy", timestamp=_utc_timestamp())

    @app.get("/", response_class=HTMLResponse)
    def list_packages(request: Request) -> Response:
        pkgs = app.state.scanner.scan()
        return templates.TemplateResponse(
            request,
            "index.html",
            {"pkgs": pkgs, "pkgs_length": len(pkgs)},
        )

    @app.post("/install", response_class=HTMLResponse)
    async def install_package(
        request: Request,
        filepath: str | None = Form(default=None),
    ) -> Response:
        try:
            resolved = validate_path(filepath, settings.static_files)
        except PathRejectedError as e:
            return PlainTextResponse(e.message, status_code=e.status_code)

        app.state.exposed.expose(resolved.parent)

        inst: PackageInstaller = app.state.installer
        try:
            message = await inst.install(resolved.name)
        except RemoteInstallError as e:
            logger.error("Installation error: %s", e)
            outcome = InstallOutcome.failed(str(e))
        except Exception as e:
            logger.exception("Unexpected installation error")
            outcome = InstallOutcome.failed(str(e))
        else:
            outcome = InstallOutcome.succeeded(message)

        return templates.TemplateResponse(
            request,
            "result.html",
            {"outcome": outcome},
            status_code=200 if outcome.success else 500,
        )

    @app.api_route("/{filename}", methods=["GET", "HEAD"], include_in_schema=False)
    async def serve_package(filename: str) -> Response:
        path = app.state.exposed.find(filename)
        if path is None:
            return PlainTextResponse("Not Found", status_code=404)
        return FileResponse(path)

    return app

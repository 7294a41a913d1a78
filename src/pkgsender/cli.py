"""Command-line interface for pkgsender.

Starts the web server, or prints the package listing for a quick check
of the configured root.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="pkgsender",
        description="Send .pkg files from this machine to a console for installation",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/pkgsender.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser("serve", help="Start the web server (default)")
    subparsers.add_parser("scan", help="List the package files under STATIC_FILES")

    return parser.parse_args(argv)


def _print_listing(settings) -> None:
    from pkgsender.library.scanner import PackageScanner

    pkgs = PackageScanner(settings.static_files).scan()
    for pkg in pkgs:
        print(f"{pkg.size_display:>10}  {pkg.filepath}")
    print(f"\n{len(pkgs)} package(s) under {settings.static_files}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the pkgsender CLI."""
    args = parse_args(argv)
    command = args.command or "serve"

    from pkgsender.config.settings import ConfigurationError, load_settings
    from pkgsender.utils.logging import setup_logging

    try:
        settings = load_settings(args.config)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    if args.verbose:
        logging_config = settings.logging.model_copy(update={"level": "DEBUG"})
        settings = settings.model_copy(update={"logging": logging_config})

    setup_logging(settings.logging)

    if command == "scan":
        logger.debug("Scanning %s", settings.static_files)
        _print_listing(settings)

    elif command == "serve":
        import uvicorn

        from pkgsender.web.server import create_app

        logger.info("Starting web server on %s:%d", settings.host, settings.port)
        app = create_app(settings)
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()

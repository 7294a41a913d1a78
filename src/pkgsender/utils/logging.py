"""Logging setup utilities for pkgsender.

Configures the ``pkgsender`` logger hierarchy and uvicorn's loggers from
the logging section of the settings, so application messages and the
access log share one format and destination.
"""

from __future__ import annotations

import logging
import sys

from pkgsender.config.settings import LoggingConfig

# uvicorn.error and uvicorn.access propagate to "uvicorn"
CONFIGURED_LOGGERS = ("pkgsender", "uvicorn")

_HANDLER_MARKER = "_pkgsender_handler"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure logging for the pkgsender application.

    Handlers installed by an earlier call are replaced, so calling this
    more than once never duplicates output. Pass ``log_config=None`` to
    ``uvicorn.run`` to keep uvicorn from installing its own handlers.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    level = getattr(logging, config.level.upper(), logging.INFO)
    formatter = logging.Formatter(config.format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))

    for name in CONFIGURED_LOGGERS:
        target = logging.getLogger(name)
        target.setLevel(level)
        for old in [h for h in target.handlers if getattr(h, _HANDLER_MARKER, False)]:
            target.removeHandler(old)
            old.close()
        for handler in handlers:
            handler.setFormatter(formatter)
            setattr(handler, _HANDLER_MARKER, True)
            target.addHandler(handler)

    logging.getLogger("pkgsender").debug("Logging initialized at %s level", config.level)

"""Logging setup for objective-ci.

All modules obtain their logger through :func:`get_logger` so that a single
call to :func:`configure_logging` controls the whole package. Log records go
to stderr; stdout is reserved for echoed commands and tool output.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER_NAME = "objective_ci"

_FORMAT = "%(levelname)s [%(name)s] %(message)s"
_DEBUG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger that lives under the package root logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure the package root logger.

    Precedence: debug > quiet > verbose > default (warnings only).

    Args:
        debug: Enable debug-level logging with timestamps.
        verbose: Enable info-level logging.
        quiet: Only log errors.
    """
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    # Replace our own handler on reconfiguration instead of stacking them
    for handler in list(root.handlers):
        if getattr(handler, "_objective_ci", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_DEBUG_FORMAT if debug else _FORMAT))
    handler._objective_ci = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.propagate = False

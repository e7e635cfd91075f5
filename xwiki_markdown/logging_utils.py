"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging
import sys


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger to write to stderr.

    Args:
        verbose: Emit debug messages from every conversion pass when True;
            only warnings otherwise.

    Returns:
        logging.Logger: The configured package logger.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    package_logger = logging.getLogger("xwiki_markdown")
    package_logger.setLevel(level)
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s: [%(name)s] %(message)s"))
    package_logger.addHandler(handler)

    return package_logger

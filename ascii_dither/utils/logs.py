"""Package logger.

Silent by default; enable with
logging.getLogger("ascii_dither").setLevel(logging.DEBUG) or via the CLI's
--verbose flag.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("ascii_dither")
logger.addHandler(logging.NullHandler())


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route package log records to stderr for command-line use."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
    logger.setLevel(level)

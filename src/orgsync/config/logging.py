"""Root logger setup for the command line."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Install a single stderr handler on the root logger.

    Request lines from httpx are only shown at DEBUG; every intended write is
    already logged at INFO by the reconcilers. ``force=True`` replaces handlers
    installed earlier, e.g. by a test run.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)

"""Logging setup for artifact-sync entry points."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Attach a single stream handler to the root logger.

    Import passes log a summary line per resource kind at INFO and every
    skipped resource at DEBUG; the format keeps the emitting module visible so
    both can be told apart. ``force=True`` replaces handlers installed earlier.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )

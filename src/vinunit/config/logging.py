"""Logging setup shared by the CLI and application entry points."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once.

    Thin wrapper over ``logging.basicConfig`` using the CLI log format. Pass
    ``force=True`` to reconfigure handlers that are already installed.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )

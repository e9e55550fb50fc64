"""Shared logging helpers for flaresync."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format suitable for cron and container logs. Pass
    ``force=True`` to reconfigure, e.g. when ``--debug`` lowers the level.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        force=force,
    )
    # google-auth and urllib3 are chatty at DEBUG; keep them at INFO.
    for noisy in ("google.auth", "urllib3", "httpcore"):
        logging.getLogger(noisy).setLevel(max(level, logging.INFO))

"""Logging setup for the dispatcher service and CLI."""

from __future__ import annotations

import logging

from vc_dispatcher import config


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from the dispatcher settings.

    Args:
        level: Log level name overriding ``VC_DISPATCHER_LOG_LEVEL``.
    """
    level_name = (level or config.VC_DISPATCHER_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=config.VC_DISPATCHER_LOG_FORMAT,
    )

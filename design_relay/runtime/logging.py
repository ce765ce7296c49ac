"""Logging initialization."""

from __future__ import annotations

import sys
import logging
from typing import TextIO

from design_relay.config.logging import LOG_LEVEL, LOG_FORMAT, TRANSPORT_LOGGERS, SHOW_TRANSPORT_LOGS


def configure_logging(stream: TextIO | None = None) -> None:
    """Configure root logging once.

    Pass ``stream=sys.stderr`` from stdio entry points so stdout carries only
    protocol traffic.
    """
    if not SHOW_TRANSPORT_LOGS:
        for name in TRANSPORT_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, stream=stream or sys.stderr)


__all__ = ["configure_logging"]

"""Logging configuration."""

from __future__ import annotations

import os

LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Transport libraries log every frame at DEBUG; keep them quiet unless asked.
SHOW_TRANSPORT_LOGS: bool = (os.getenv("SHOW_TRANSPORT_LOGS") or "").strip().lower() in {"1", "true", "yes"}
TRANSPORT_LOGGERS: tuple[str, ...] = ("websockets", "uvicorn.access")

__all__ = ["LOG_FORMAT", "LOG_LEVEL", "SHOW_TRANSPORT_LOGS", "TRANSPORT_LOGGERS"]

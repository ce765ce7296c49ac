"""Configuration module exports (env names, defaults and protocol constants)."""

from .relay import (
    WS_ENDPOINT_PATH,
    DEFAULT_RELAY_PORT,
)
from .client import (
    DEFAULT_RECONNECT_DELAY_S,
    DEFAULT_PROGRESS_TIMEOUT_S,
    DEFAULT_REQUEST_TIMEOUT_S,
)

__all__ = [
    "DEFAULT_PROGRESS_TIMEOUT_S",
    "DEFAULT_RECONNECT_DELAY_S",
    "DEFAULT_RELAY_PORT",
    "DEFAULT_REQUEST_TIMEOUT_S",
    "WS_ENDPOINT_PATH",
]

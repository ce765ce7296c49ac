"""Command client configuration (env names and defaults)."""

from __future__ import annotations

ENV_RELAY_SERVER = "RELAY_SERVER"
ENV_RELAY_CLIENT_PORT = "RELAY_PORT"
ENV_REQUEST_TIMEOUT_S = "RELAY_REQUEST_TIMEOUT_S"
ENV_PROGRESS_TIMEOUT_S = "RELAY_PROGRESS_TIMEOUT_S"
ENV_RECONNECT_DELAY_S = "RELAY_RECONNECT_DELAY_S"

DEFAULT_RELAY_SERVER = "localhost"
DEFAULT_RELAY_CLIENT_PORT = 3055

# A call with no progress frames times out after this long.
DEFAULT_REQUEST_TIMEOUT_S = 30.0
# Once a progress frame arrives, the call times out after this much inactivity.
DEFAULT_PROGRESS_TIMEOUT_S = 60.0
# Flat delay between reconnection attempts (no exponential backoff).
DEFAULT_RECONNECT_DELAY_S = 2.0

__all__ = [
    "DEFAULT_PROGRESS_TIMEOUT_S",
    "DEFAULT_RECONNECT_DELAY_S",
    "DEFAULT_RELAY_CLIENT_PORT",
    "DEFAULT_RELAY_SERVER",
    "DEFAULT_REQUEST_TIMEOUT_S",
    "ENV_PROGRESS_TIMEOUT_S",
    "ENV_RECONNECT_DELAY_S",
    "ENV_RELAY_CLIENT_PORT",
    "ENV_RELAY_SERVER",
    "ENV_REQUEST_TIMEOUT_S",
]

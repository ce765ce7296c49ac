"""Relay server configuration (env names and defaults)."""

from __future__ import annotations

ENV_RELAY_HOST = "RELAY_HOST"
ENV_RELAY_PORT = "RELAY_PORT"
ENV_SSL_KEY_PATH = "SSL_KEY_PATH"
ENV_SSL_CERT_PATH = "SSL_CERT_PATH"
ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"
ENV_RELAY_NOTIFY_PEERS = "RELAY_NOTIFY_PEERS"

DEFAULT_RELAY_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_RELAY_PORT = 3055
DEFAULT_MAX_CONCURRENT_CONNECTIONS = 100
DEFAULT_RELAY_NOTIFY_PEERS = False

# The relay serves a single WebSocket endpoint at the root path.
WS_ENDPOINT_PATH = "/"

# Close codes
WS_CLOSE_BUSY_CODE = 4002

# Error codes (sent in relay error notices)
WS_ERROR_SERVER_AT_CAPACITY = "server_at_capacity"
WS_ERROR_MISSING_CHANNEL = "missing_channel"
WS_ERROR_NOT_IN_CHANNEL = "not_in_channel"

__all__ = [
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "DEFAULT_RELAY_HOST",
    "DEFAULT_RELAY_NOTIFY_PEERS",
    "DEFAULT_RELAY_PORT",
    "ENV_MAX_CONCURRENT_CONNECTIONS",
    "ENV_RELAY_HOST",
    "ENV_RELAY_NOTIFY_PEERS",
    "ENV_RELAY_PORT",
    "ENV_SSL_CERT_PATH",
    "ENV_SSL_KEY_PATH",
    "WS_CLOSE_BUSY_CODE",
    "WS_ENDPOINT_PATH",
    "WS_ERROR_MISSING_CHANNEL",
    "WS_ERROR_NOT_IN_CHANNEL",
    "WS_ERROR_SERVER_AT_CAPACITY",
]

"""Load runtime settings.

Env names and defaults live in `design_relay/config/*`; this module resolves
them into the frozen dataclasses of `design_relay/state/settings.py`. CLI flags
are applied on top by the entry points.
"""

from __future__ import annotations

import os

from design_relay.state.settings import AppSettings, RelaySettings, ClientSettings
from design_relay.config.client import (
    ENV_RELAY_SERVER,
    DEFAULT_RELAY_SERVER,
    ENV_RELAY_CLIENT_PORT,
    ENV_REQUEST_TIMEOUT_S,
    ENV_RECONNECT_DELAY_S,
    ENV_PROGRESS_TIMEOUT_S,
    DEFAULT_RECONNECT_DELAY_S,
    DEFAULT_RELAY_CLIENT_PORT,
    DEFAULT_REQUEST_TIMEOUT_S,
    DEFAULT_PROGRESS_TIMEOUT_S,
)
from design_relay.config.relay import (
    ENV_RELAY_HOST,
    ENV_RELAY_PORT,
    ENV_SSL_KEY_PATH,
    ENV_SSL_CERT_PATH,
    DEFAULT_RELAY_HOST,
    DEFAULT_RELAY_PORT,
    ENV_RELAY_NOTIFY_PEERS,
    DEFAULT_RELAY_NOTIFY_PEERS,
    ENV_MAX_CONCURRENT_CONNECTIONS,
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _optional_str_env(name: str) -> str | None:
    v = (os.getenv(name) or "").strip()
    return v or None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _positive(value: float, default: float) -> float:
    return value if value > 0 else default


def load_relay_settings() -> RelaySettings:
    max_connections = _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
    if max_connections <= 0:
        max_connections = DEFAULT_MAX_CONCURRENT_CONNECTIONS

    return RelaySettings(
        host=_str_env(ENV_RELAY_HOST, DEFAULT_RELAY_HOST),
        port=_int_env(ENV_RELAY_PORT, DEFAULT_RELAY_PORT),
        ssl_key_path=_optional_str_env(ENV_SSL_KEY_PATH),
        ssl_cert_path=_optional_str_env(ENV_SSL_CERT_PATH),
        max_concurrent_connections=max_connections,
        notify_peers=_bool_env(ENV_RELAY_NOTIFY_PEERS, DEFAULT_RELAY_NOTIFY_PEERS),
    )


def load_client_settings() -> ClientSettings:
    return ClientSettings(
        server=_str_env(ENV_RELAY_SERVER, DEFAULT_RELAY_SERVER),
        port=_int_env(ENV_RELAY_CLIENT_PORT, DEFAULT_RELAY_CLIENT_PORT),
        request_timeout_s=_positive(
            _float_env(ENV_REQUEST_TIMEOUT_S, DEFAULT_REQUEST_TIMEOUT_S), DEFAULT_REQUEST_TIMEOUT_S
        ),
        progress_timeout_s=_positive(
            _float_env(ENV_PROGRESS_TIMEOUT_S, DEFAULT_PROGRESS_TIMEOUT_S), DEFAULT_PROGRESS_TIMEOUT_S
        ),
        reconnect_delay_s=max(0.0, _float_env(ENV_RECONNECT_DELAY_S, DEFAULT_RECONNECT_DELAY_S)),
    )


def load_settings() -> AppSettings:
    return AppSettings(relay=load_relay_settings(), client=load_client_settings())


__all__ = ["load_client_settings", "load_relay_settings", "load_settings"]

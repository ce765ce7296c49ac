from __future__ import annotations

from design_relay.config.client import DEFAULT_RELAY_CLIENT_PORT

_LOCAL_HOSTS = {"localhost", "127.0.0.1"}


def build_relay_url(server: str, port: int = DEFAULT_RELAY_CLIENT_PORT) -> str:
    """Resolve a ``--server`` value to the relay URL.

    Local hosts get plain ``ws://`` on ``port``; any other host is assumed to
    sit behind TLS on the default port. Explicit ``ws://``/``wss://`` URLs pass
    through unchanged.
    """
    s = (server or "").strip()
    if s.startswith(("ws://", "wss://")):
        return s
    s = s.rstrip("/") or "localhost"
    if s in _LOCAL_HOSTS:
        return f"ws://{s}:{int(port)}"
    return f"wss://{s}"


__all__ = ["build_relay_url"]

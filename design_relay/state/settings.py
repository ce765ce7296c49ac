"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RelaySettings:
    host: str
    port: int
    ssl_key_path: str | None
    ssl_cert_path: str | None
    max_concurrent_connections: int
    notify_peers: bool

    @property
    def ssl_enabled(self) -> bool:
        return bool(self.ssl_key_path and self.ssl_cert_path)


@dataclass(frozen=True, slots=True)
class ClientSettings:
    server: str
    port: int
    request_timeout_s: float
    progress_timeout_s: float
    reconnect_delay_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    relay: RelaySettings
    client: ClientSettings


__all__ = [
    "AppSettings",
    "ClientSettings",
    "RelaySettings",
]

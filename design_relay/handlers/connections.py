"""WebSocket connection admission control for the relay."""

from __future__ import annotations

from typing import Any


class ConnectionManager:
    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._active: set[int] = set()
        self._peak = 0

    @property
    def capacity(self) -> int:
        return self._max

    @property
    def peak(self) -> int:
        return self._peak

    def admit(self, ws: Any) -> bool:
        """Reserve a slot for ``ws`` (before the handshake is accepted)."""
        key = id(ws)
        if key in self._active:
            return True
        if len(self._active) >= self._max:
            return False
        self._active.add(key)
        self._peak = max(self._peak, len(self._active))
        return True

    def release(self, ws: Any) -> None:
        self._active.discard(id(ws))

    def get_connection_count(self) -> int:
        return len(self._active)


__all__ = ["ConnectionManager"]

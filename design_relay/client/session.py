"""Per-connection session state for the command client."""

from __future__ import annotations

import logging
from typing import Any

from design_relay.state.session import SessionPhase

logger = logging.getLogger(__name__)


class RelaySession:
    """Live relay connection plus the one channel it has joined.

    Phases move ``closed -> open -> joined(channel) -> closed``. Opening always
    starts without a channel: membership does not survive a reconnect.
    """

    def __init__(self) -> None:
        self._connection: Any = None
        self._channel: str | None = None
        self._phase = SessionPhase.CLOSED

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def channel(self) -> str | None:
        return self._channel

    @property
    def is_open(self) -> bool:
        return self._phase is not SessionPhase.CLOSED and self._connection is not None

    def open(self, connection: Any) -> None:
        self._connection = connection
        self._channel = None
        self._phase = SessionPhase.OPEN

    def joined(self, channel: str) -> None:
        if not self.is_open:
            raise RuntimeError("cannot join a channel on a closed session")
        self._channel = channel
        self._phase = SessionPhase.JOINED
        logger.info("Joined channel: %s", channel)

    def close(self) -> None:
        self._connection = None
        self._channel = None
        self._phase = SessionPhase.CLOSED


__all__ = ["RelaySession"]

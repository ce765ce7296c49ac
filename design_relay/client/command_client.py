"""Correlated request/response client over one relay connection."""

from __future__ import annotations

import uuid
import logging
from typing import Any
from collections.abc import Callable

from design_relay.protocol.parser import parse_frame
from design_relay.state.progress import CommandProgress
from design_relay.config.protocol import JOIN_COMMAND, KEY_CHANNEL
from design_relay.errors import NoChannelError, NotConnectedError, ConnectionClosedError
from design_relay.config.client import DEFAULT_REQUEST_TIMEOUT_S, DEFAULT_PROGRESS_TIMEOUT_S
from design_relay.protocol.envelope import dumps, build_join_envelope, build_command_envelope

from .session import RelaySession
from .pending import PendingRequestTable
from .dispatch import Outcome, dispatch_frame

logger = logging.getLogger(__name__)


def _new_request_id() -> str:
    return str(uuid.uuid4())


class CommandClient:
    """Turns ``call(command, params)`` into an awaitable correlated round trip.

    The client owns the pending table and a :class:`RelaySession`. The
    transport is injected through :meth:`attach`: any object with an async
    ``send(text)`` works, which is what the connection loop and the tests use.
    """

    def __init__(
        self,
        session: RelaySession | None = None,
        *,
        request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S,
        progress_timeout_s: float = DEFAULT_PROGRESS_TIMEOUT_S,
        id_factory: Callable[[], str] = _new_request_id,
    ) -> None:
        self._session = session or RelaySession()
        self._pending = PendingRequestTable()
        self._request_timeout_s = request_timeout_s
        self._progress_timeout_s = progress_timeout_s
        self._new_id = id_factory

    @property
    def session(self) -> RelaySession:
        return self._session

    @property
    def pending(self) -> PendingRequestTable:
        return self._pending

    @property
    def channel(self) -> str | None:
        return self._session.channel

    @property
    def is_connected(self) -> bool:
        return self._session.is_open

    def attach(self, connection: Any) -> None:
        self._session.open(connection)
        logger.info("Connected to relay")

    def detach(self) -> int:
        """Reject every in-flight call and close the session; returns the count rejected."""
        rejected = self._pending.reject_all(lambda entry: ConnectionClosedError(entry.request_id, entry.command))
        self._session.close()
        if rejected:
            logger.info("Rejected %s pending request(s): connection closed", rejected)
        return rejected

    def handle_frame(self, raw: str | bytes) -> Outcome:
        try:
            frame = parse_frame(raw)
        except ValueError as exc:
            logger.error("Error parsing message: %s", exc)
            return "ignored"
        return dispatch_frame(frame, self._pending, progress_timeout_s=self._progress_timeout_s)

    def _build_envelope(self, request_id: str, command: str, params: dict[str, Any]) -> dict[str, Any]:
        if command == JOIN_COMMAND:
            return build_join_envelope(request_id, str(params.get(KEY_CHANNEL) or ""))
        channel = self._session.channel
        if channel is None:
            raise NoChannelError(command)
        return build_command_envelope(request_id, channel, command, params)

    async def call(
        self,
        command: str,
        params: dict[str, Any] | None = None,
        timeout_s: float | None = None,
        *,
        on_progress: Callable[[CommandProgress], None] | None = None,
    ) -> Any:
        connection = self._session.connection
        if not self._session.is_open or connection is None:
            raise NotConnectedError(command)
        if command != JOIN_COMMAND and self._session.channel is None:
            raise NoChannelError(command)

        request_id = self._new_id()
        envelope = self._build_envelope(request_id, command, dict(params or {}))
        future = self._pending.create(
            request_id,
            command,
            self._request_timeout_s if timeout_s is None else timeout_s,
            on_progress=on_progress,
        )

        logger.info("Sending command to relay: %s", command)
        logger.debug("Request details: %s", envelope)
        try:
            await connection.send(dumps(envelope))
        except Exception as exc:
            self._pending.discard(request_id)
            logger.error("Send failed for %s (%s): %s", command, request_id, exc)
            raise ConnectionClosedError(request_id, command) from exc

        return await future

    async def join_channel(self, channel: str, timeout_s: float | None = None) -> Any:
        channel = (channel or "").strip()
        if not channel:
            raise ValueError("channel name is required")

        connection = self._session.connection
        try:
            result = await self.call(JOIN_COMMAND, {KEY_CHANNEL: channel}, timeout_s)
        except Exception as exc:
            logger.error("Failed to join channel: %s", exc)
            raise
        # A reconnect while the ack was in flight leaves the new session unjoined.
        if self._session.connection is connection and self._session.is_open:
            self._session.joined(channel)
        return result


__all__ = ["CommandClient"]

"""Channel membership and fan-out for the relay.

The hub is transport-agnostic: a member is any hashable object accepted by the
``send_fn`` the hub was built with (by default, anything exposing an async
``send_text``). It holds no command semantics and never looks inside the
frames it forwards.
"""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

from design_relay.config.protocol import SYSTEM_PEER_LEFT, SYSTEM_PEER_JOINED
from design_relay.protocol.envelope import dumps, build_system_envelope

logger = logging.getLogger(__name__)

SendFn = Callable[[Any, str], Awaitable[bool]]


async def _default_send(member: Any, text: str) -> bool:
    await member.send_text(text)
    return True


class ChannelHub:
    def __init__(self, *, send_fn: SendFn | None = None, notify_peers: bool = False) -> None:
        self._send = send_fn or _default_send
        self._notify_peers = bool(notify_peers)
        self._channels: dict[str, set[Any]] = {}
        self._membership: dict[Any, str | None] = {}

    def register(self, conn: Any) -> None:
        self._membership.setdefault(conn, None)

    def channel_of(self, conn: Any) -> str | None:
        return self._membership.get(conn)

    def members(self, channel: str) -> frozenset[Any]:
        return frozenset(self._channels.get(channel, ()))

    def channel_names(self) -> list[str]:
        return sorted(self._channels)

    def connection_count(self) -> int:
        return len(self._membership)

    def _leave_current(self, conn: Any) -> str | None:
        previous = self._membership.get(conn)
        if previous is None:
            return None
        members = self._channels.get(previous)
        if members is not None:
            members.discard(conn)
            if not members:
                # Channels exist only while they have members.
                del self._channels[previous]
        self._membership[conn] = None
        return previous

    async def join(self, conn: Any, channel: str) -> str | None:
        """Move ``conn`` into ``channel``; returns the channel it left, if any."""
        if not channel:
            raise ValueError("channel name is required")
        self._membership.setdefault(conn, None)
        previous = self._membership.get(conn)
        if previous == channel:
            return None
        self._leave_current(conn)
        peers = list(self._channels.get(channel, ()))
        self._channels.setdefault(channel, set()).add(conn)
        self._membership[conn] = channel
        logger.info("relay: connection joined channel=%s (members=%s)", channel, len(peers) + 1)

        if previous is not None and self._notify_peers:
            await self._notify(previous, SYSTEM_PEER_LEFT, exclude=conn)
        if self._notify_peers and peers:
            await self._notify(channel, SYSTEM_PEER_JOINED, exclude=conn)
        return previous

    async def broadcast(self, sender: Any, channel: str, text: str) -> int:
        """Forward ``text`` unchanged to every member of ``channel`` except ``sender``.

        A channel with no other members drops the frame silently.
        """
        recipients = [member for member in self._channels.get(channel, ()) if member is not sender]
        if not recipients:
            logger.debug("relay: no recipients in channel=%s; frame dropped", channel)
            return 0

        delivered = 0
        for member in recipients:
            try:
                ok = await self._send(member, text)
            except Exception:
                logger.warning("relay: forward to channel=%s member failed", channel, exc_info=True)
                continue
            if ok:
                delivered += 1
        return delivered

    async def unregister(self, conn: Any) -> str | None:
        if conn not in self._membership:
            return None
        previous = self._leave_current(conn)
        del self._membership[conn]
        if previous is not None:
            logger.info("relay: connection left channel=%s", previous)
            if self._notify_peers:
                await self._notify(previous, SYSTEM_PEER_LEFT, exclude=conn)
        return previous

    async def _notify(self, channel: str, message: str, *, exclude: Any) -> None:
        await self.broadcast(exclude, channel, dumps(build_system_envelope(message, channel)))

    def clear(self) -> None:
        self._channels.clear()
        self._membership.clear()


__all__ = ["ChannelHub"]

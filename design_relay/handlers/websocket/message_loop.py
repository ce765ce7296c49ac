"""WebSocket message loop and dispatch for the channel relay (/)."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

from fastapi import WebSocket, WebSocketDisconnect

from design_relay.state.runtime import RuntimeDeps
from design_relay.protocol.parser import parse_frame
from design_relay.config.relay import WS_ERROR_NOT_IN_CHANNEL, WS_ERROR_MISSING_CHANNEL
from design_relay.protocol.envelope import build_join_ack, build_system_envelope
from design_relay.config.protocol import KEY_ID, KEY_TYPE, TYPE_JOIN, KEY_CHANNEL

from .errors import send_error, safe_send_envelope

logger = logging.getLogger(__name__)

HandlerFn = Callable[[WebSocket, RuntimeDeps, dict[str, Any], str], Awaitable[None]]


async def _receive_frame(ws: WebSocket) -> str | bytes:
    message = await ws.receive()
    if message.get("type") == "websocket.disconnect":
        raise WebSocketDisconnect(code=message.get("code", 1000), reason=message.get("reason"))
    text = message.get("text")
    if text is not None:
        return text
    data = message.get("bytes")
    return data if data is not None else b""


async def _handle_join(ws: WebSocket, deps: RuntimeDeps, msg: dict[str, Any], _raw: str) -> None:
    channel = msg.get(KEY_CHANNEL)
    if not channel:
        await send_error(ws, code=WS_ERROR_MISSING_CHANNEL, message="Channel name is required")
        return

    await deps.hub.join(ws, channel)
    await safe_send_envelope(ws, build_system_envelope(f"Joined channel: {channel}", channel))

    request_id = msg.get(KEY_ID)
    if request_id:
        # The ack carries the request id; it is what settles the caller's join.
        await safe_send_envelope(ws, build_join_ack(request_id, channel))


async def _handle_forward(ws: WebSocket, deps: RuntimeDeps, msg: dict[str, Any], raw: str) -> None:
    joined = deps.hub.channel_of(ws)
    # Sandbox replies and progress frames may omit the channel; they belong to the sender's.
    channel = msg.get(KEY_CHANNEL) or joined
    if not channel or joined != channel:
        logger.debug("relay: frame type=%s from non-member dropped", msg.get(KEY_TYPE))
        await send_error(ws, code=WS_ERROR_NOT_IN_CHANNEL, message="You must join the channel first")
        return
    delivered = await deps.hub.broadcast(ws, channel, raw)
    logger.debug("relay: forwarded type=%s channel=%s recipients=%s", msg.get(KEY_TYPE), channel, delivered)


HANDLERS: dict[str, HandlerFn] = {
    TYPE_JOIN: _handle_join,
}


async def run_message_loop(ws: WebSocket, deps: RuntimeDeps) -> str | None:
    """Serve frames until the peer disconnects; returns the last joined channel."""
    try:
        while True:
            frame = await _receive_frame(ws)
            raw = frame.decode("utf-8", errors="replace") if isinstance(frame, bytes) else frame

            try:
                msg = parse_frame(raw)
            except ValueError as exc:
                logger.warning("relay: malformed frame dropped: %s", exc)
                continue

            handler = HANDLERS.get(msg.get(KEY_TYPE) or "", _handle_forward)
            await handler(ws, deps, msg, raw)
    except WebSocketDisconnect:
        return deps.hub.channel_of(ws)


__all__ = ["HANDLERS", "run_message_loop"]

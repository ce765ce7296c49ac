"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from design_relay.state.runtime import RuntimeDeps
from design_relay.config.protocol import SYSTEM_GREETING
from design_relay.protocol.envelope import build_system_envelope
from design_relay.config.relay import WS_CLOSE_BUSY_CODE, WS_ERROR_SERVER_AT_CAPACITY

from .errors import reject_connection, safe_send_envelope
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, deps: RuntimeDeps) -> bool:
    if not deps.connections.admit(ws):
        await reject_connection(
            ws,
            error_code=WS_ERROR_SERVER_AT_CAPACITY,
            message="Server cannot accept new connections. Please try again later.",
            close_code=WS_CLOSE_BUSY_CODE,
        )
        return False

    try:
        await ws.accept()
    except Exception:
        deps.connections.release(ws)
        raise
    return True


async def handle_websocket_connection(ws: WebSocket, deps: RuntimeDeps) -> None:
    admitted = False
    channel: str | None = None
    try:
        if not await _prepare_connection(ws, deps):
            return
        admitted = True

        deps.hub.register(ws)
        logger.info("WebSocket connection accepted. Active: %s", deps.connections.get_connection_count())
        await safe_send_envelope(ws, build_system_envelope(SYSTEM_GREETING))

        channel = await run_message_loop(ws, deps)
    finally:
        if admitted:
            with contextlib.suppress(Exception):
                channel = await deps.hub.unregister(ws) or channel
            deps.connections.release(ws)
            logger.info(
                "WebSocket connection closed channel=%s. Active: %s",
                channel,
                deps.connections.get_connection_count(),
            )


__all__ = ["handle_websocket_connection"]

"""Send helpers and error notices for relay WebSocket connections."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from design_relay.protocol.envelope import dumps, build_error_notice

logger = logging.getLogger(__name__)


async def safe_send_text(ws: Any, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_envelope(ws: Any, envelope: dict[str, Any]) -> bool:
    return await safe_send_text(ws, dumps(envelope))


async def send_error(ws: Any, *, code: str, message: str) -> bool:
    return await safe_send_envelope(ws, build_error_notice(code, message))


async def reject_connection(
    ws: WebSocket,
    *,
    error_code: str,
    message: str,
    close_code: int,
) -> None:
    # Accept so we can send a structured notice, then close.
    try:
        await ws.accept()
    except Exception:
        return
    await send_error(ws, code=error_code, message=message)
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = [
    "reject_connection",
    "safe_send_envelope",
    "safe_send_text",
    "send_error",
]

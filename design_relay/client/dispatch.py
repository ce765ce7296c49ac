"""Inbound frame dispatch for the command client, keyed by frame type."""

from __future__ import annotations

import logging
from typing import Any
from typing import Literal
from collections.abc import Callable

from design_relay.errors import RemoteCommandError
from design_relay.config.protocol import (
    KEY_ID,
    KEY_TYPE,
    KEY_ERROR,
    KEY_RESULT,
    KEY_MESSAGE,
    TYPE_PROGRESS_UPDATE,
)

from .pending import PendingRequestTable
from .progress import parse_progress, record_progress

logger = logging.getLogger(__name__)

Outcome = Literal["progress", "resolved", "rejected", "ignored"]
HandlerFn = Callable[[dict[str, Any], PendingRequestTable, float], Outcome]


def _handle_progress(frame: dict[str, Any], table: PendingRequestTable, progress_timeout_s: float) -> Outcome:
    progress = parse_progress(frame)
    if progress is None:
        logger.debug("dispatch: progress frame without correlation id dropped")
        return "ignored"
    if record_progress(table, progress, timeout_s=progress_timeout_s):
        return "progress"
    return "ignored"


def _handle_response(frame: dict[str, Any], table: PendingRequestTable, _progress_timeout_s: float) -> Outcome:
    message = frame.get(KEY_MESSAGE)
    request_id = message.get(KEY_ID) if isinstance(message, dict) else None
    if not isinstance(request_id, str) or request_id not in table:
        logger.info("Received broadcast message: %s", message)
        return "ignored"

    error = message.get(KEY_ERROR)
    if error:
        entry = table.get(request_id)
        command = entry.command if entry is not None else "unknown"
        logger.error("Error from sandbox for %s: %s", request_id, error)
        table.reject(request_id, RemoteCommandError(request_id, command, str(error)))
        return "rejected"

    if KEY_RESULT in message:
        logger.debug("Received result for %s", request_id)
        table.resolve(request_id, message[KEY_RESULT])
        return "resolved"

    logger.debug("dispatch: non-terminal message for %s ignored", request_id)
    return "ignored"


HANDLERS: dict[str, HandlerFn] = {
    TYPE_PROGRESS_UPDATE: _handle_progress,
}


def dispatch_frame(frame: dict[str, Any], table: PendingRequestTable, *, progress_timeout_s: float) -> Outcome:
    handler = HANDLERS.get(frame.get(KEY_TYPE) or "", _handle_response)
    return handler(frame, table, progress_timeout_s)


__all__ = ["HANDLERS", "Outcome", "dispatch_frame"]

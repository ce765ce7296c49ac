"""Progress frame parsing and handling for long-running chunked commands."""

from __future__ import annotations

import logging
from typing import Any

from design_relay.state.progress import CommandProgress
from design_relay.config.protocol import (
    KEY_ID,
    KEY_DATA,
    KEY_MESSAGE,
    KEY_COMMAND_ID,
    PROGRESS_STATUSES,
    PROGRESS_STATUS_IN_PROGRESS,
)

from .pending import PendingRequestTable

logger = logging.getLogger(__name__)


def _float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _optional_int(value: Any) -> int | None:
    return None if value is None else _int(value)


def parse_progress(frame: dict[str, Any]) -> CommandProgress | None:
    """Extract a progress record from a ``progress_update`` frame.

    Tolerant by construction: missing fields take defaults and unknown status
    strings are kept verbatim. Returns None only when no correlation id can be
    found in ``frame.id`` or ``message.data.commandId``.
    """
    message = frame.get(KEY_MESSAGE)
    data = message.get(KEY_DATA) if isinstance(message, dict) else None
    if not isinstance(data, dict):
        data = {}

    command_id = frame.get(KEY_ID) or data.get(KEY_COMMAND_ID)
    if not isinstance(command_id, str) or not command_id:
        return None

    status = data.get("status")
    if not isinstance(status, str) or not status:
        status = PROGRESS_STATUS_IN_PROGRESS
    elif status not in PROGRESS_STATUSES:
        logger.debug("progress: unknown status %r for %s", status, command_id)

    timestamp = data.get("timestamp")
    return CommandProgress(
        command_id=command_id,
        command_type=str(data.get("commandType") or "unknown"),
        status=status,
        progress=_float(data.get("progress")),
        total_items=_int(data.get("totalItems")),
        processed_items=_int(data.get("processedItems")),
        current_chunk=_optional_int(data.get("currentChunk")),
        total_chunks=_optional_int(data.get("totalChunks")),
        chunk_size=_optional_int(data.get("chunkSize")),
        message=str(data.get("message") or ""),
        payload=data.get("payload"),
        timestamp=None if timestamp is None else _float(timestamp),
    )


def record_progress(table: PendingRequestTable, progress: CommandProgress, *, timeout_s: float) -> bool:
    """Apply one progress record to its pending request; never settles the call."""
    entry = table.get(progress.command_id)
    if entry is None:
        logger.debug("progress: no pending request for %s; dropped", progress.command_id)
        return False

    entry.progress = progress
    entry.progress_frames += 1
    table.refresh(progress.command_id, timeout_s)

    logger.info("Progress update for %s: %s%% - %s", progress.command_type, f"{progress.progress:g}", progress.message)
    if progress.reports_complete:
        logger.info("Operation %s completed, waiting for final result", progress.command_type)

    if entry.on_progress is not None:
        try:
            entry.on_progress(progress)
        except Exception:
            logger.exception("progress callback failed for %s", progress.command_id)
    return True


__all__ = ["parse_progress", "record_progress"]

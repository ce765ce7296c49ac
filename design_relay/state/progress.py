"""Progress record for long-running chunked commands (dataclass only)."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

from design_relay.config.protocol import PROGRESS_STATUS_COMPLETED


@dataclass(frozen=True, slots=True)
class CommandProgress:
    command_id: str
    command_type: str = "unknown"
    status: str = "in_progress"
    progress: float = 0.0
    total_items: int = 0
    processed_items: int = 0
    current_chunk: int | None = None
    total_chunks: int | None = None
    chunk_size: int | None = None
    message: str = ""
    payload: Any = None
    timestamp: float | None = None

    @property
    def reports_complete(self) -> bool:
        # Reported completion is informational only; the call still waits for its terminal frame.
        return self.status == PROGRESS_STATUS_COMPLETED and self.progress >= 100


__all__ = ["CommandProgress"]

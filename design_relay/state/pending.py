"""In-flight request record keyed by correlation id (dataclass only)."""

from __future__ import annotations

import time
import asyncio
from typing import Any
from collections.abc import Callable
from dataclasses import field, dataclass

from .progress import CommandProgress


@dataclass(slots=True)
class PendingRequest:
    request_id: str
    command: str
    future: asyncio.Future[Any]
    timeout_s: float
    timer: asyncio.TimerHandle | None = None
    created_at: float = field(default_factory=time.monotonic)
    last_activity: float = field(default_factory=time.monotonic)
    progress: CommandProgress | None = None
    progress_frames: int = 0
    on_progress: Callable[[CommandProgress], None] | None = None

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None


__all__ = ["PendingRequest"]

"""Pending request table: correlation id -> in-flight future plus its timeout.

Every mutation here is synchronous. Callers must never split a lookup and the
matching insert/delete/re-arm across an ``await``; the single-threaded event
loop is the only lock.
"""

from __future__ import annotations

import time
import asyncio
import logging
from typing import Any
from collections.abc import Callable, Iterator

from design_relay.errors import CommandTimeoutError
from design_relay.state.pending import PendingRequest
from design_relay.state.progress import CommandProgress

logger = logging.getLogger(__name__)

ExcFactory = Callable[[PendingRequest], BaseException]


class PendingRequestTable:
    def __init__(self) -> None:
        self._entries: dict[str, PendingRequest] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def get(self, request_id: str) -> PendingRequest | None:
        return self._entries.get(request_id)

    def create(
        self,
        request_id: str,
        command: str,
        timeout_s: float,
        *,
        on_progress: Callable[[CommandProgress], None] | None = None,
    ) -> asyncio.Future[Any]:
        if request_id in self._entries:
            raise ValueError(f"request id already pending: {request_id}")

        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()
        entry = PendingRequest(
            request_id=request_id,
            command=command,
            future=future,
            timeout_s=timeout_s,
            on_progress=on_progress,
        )
        entry.timer = loop.call_later(timeout_s, self._expire, entry)
        self._entries[request_id] = entry
        future.add_done_callback(lambda fut: self._on_done(entry, fut))
        return future

    def refresh(self, request_id: str, timeout_s: float) -> bool:
        """Re-arm the timer for ``request_id``; False when it is no longer pending."""
        entry = self._entries.get(request_id)
        if entry is None:
            return False
        entry.cancel_timer()
        entry.timeout_s = timeout_s
        entry.last_activity = time.monotonic()
        entry.timer = entry.future.get_loop().call_later(timeout_s, self._expire, entry)
        return True

    def resolve(self, request_id: str, result: Any) -> bool:
        entry = self._take(request_id)
        if entry is None:
            return False
        if not entry.future.done():
            entry.future.set_result(result)
        return True

    def reject(self, request_id: str, exc: BaseException) -> bool:
        entry = self._take(request_id)
        if entry is None:
            return False
        if not entry.future.done():
            entry.future.set_exception(exc)
        return True

    def reject_all(self, exc_factory: ExcFactory) -> int:
        """Reject and remove every entry; the table is empty on return."""
        entries = list(self._entries.values())
        self._entries.clear()
        for entry in entries:
            entry.cancel_timer()
            if not entry.future.done():
                entry.future.set_exception(exc_factory(entry))
        return len(entries)

    def discard(self, request_id: str) -> PendingRequest | None:
        return self._take(request_id)

    def _take(self, request_id: str) -> PendingRequest | None:
        entry = self._entries.pop(request_id, None)
        if entry is not None:
            entry.cancel_timer()
        return entry

    def _expire(self, entry: PendingRequest) -> None:
        # A late timer for a settled or replaced entry is a no-op.
        if self._entries.get(entry.request_id) is not entry:
            return
        del self._entries[entry.request_id]
        entry.timer = None
        after_progress = entry.progress_frames > 0
        if after_progress:
            logger.error(
                "Request %s timed out after extended period of inactivity (%.1fs since sent)",
                entry.request_id,
                time.monotonic() - entry.created_at,
            )
        else:
            logger.error("Request %s to relay timed out after %s seconds", entry.request_id, entry.timeout_s)
        if not entry.future.done():
            entry.future.set_exception(
                CommandTimeoutError(entry.request_id, entry.command, entry.timeout_s, after_progress=after_progress)
            )

    def _on_done(self, entry: PendingRequest, future: asyncio.Future[Any]) -> None:
        # Caller-side cancellation (e.g. wait_for) must not leave the entry behind.
        if future.cancelled() and self._entries.get(entry.request_id) is entry:
            self._take(entry.request_id)


__all__ = ["PendingRequestTable"]

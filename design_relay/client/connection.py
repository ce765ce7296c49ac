"""Relay connection lifecycle: connect, pump frames, tear down, reconnect."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

import websockets
from websockets.exceptions import WebSocketException

from design_relay.config.client import DEFAULT_RECONNECT_DELAY_S

from .command_client import CommandClient

logger = logging.getLogger(__name__)

ConnectFn = Callable[..., Any]


class RelayConnector:
    """Keeps a :class:`CommandClient` attached to the relay.

    Every connection starts unjoined. When it closes, all in-flight calls are
    rejected and the loop waits a flat ``reconnect_delay_s`` before retrying.
    Channel membership is never restored here; callers rejoin explicitly.
    """

    def __init__(
        self,
        client: CommandClient,
        *,
        url: str,
        reconnect_delay_s: float = DEFAULT_RECONNECT_DELAY_S,
        connect_fn: ConnectFn | None = None,
    ) -> None:
        self._client = client
        self._url = url
        self._reconnect_delay_s = reconnect_delay_s
        self._connect = connect_fn or websockets.connect
        self._ws: Any = None
        self._connected = asyncio.Event()
        self._stopping = asyncio.Event()
        self._attempts = 0

    @property
    def url(self) -> str:
        return self._url

    @property
    def attempts(self) -> int:
        return self._attempts

    async def run(self) -> None:
        while not self._stopping.is_set():
            self._attempts += 1
            try:
                await self._run_once()
            except (OSError, TimeoutError, WebSocketException) as exc:
                logger.error("Socket error: %s", exc)
            finally:
                self._teardown()

            if self._stopping.is_set():
                break
            logger.info("Attempting to reconnect in %s seconds...", f"{self._reconnect_delay_s:g}")
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._stopping.wait(), timeout=self._reconnect_delay_s)

    async def _run_once(self) -> None:
        logger.info("Connecting to relay socket server at %s...", self._url)
        async with self._connect(self._url) as ws:
            self._ws = ws
            self._client.attach(ws)
            self._connected.set()
            async for raw in ws:
                self._client.handle_frame(raw)
        logger.info("Disconnected from relay socket server")

    def _teardown(self) -> None:
        self._connected.clear()
        self._ws = None
        self._client.detach()

    async def wait_connected(self, timeout: float | None = None) -> bool:
        try:
            await asyncio.wait_for(self._connected.wait(), timeout=timeout)
        except TimeoutError:
            return False
        return True

    async def stop(self) -> None:
        self._stopping.set()
        ws = self._ws
        if ws is not None:
            with contextlib.suppress(Exception):
                await ws.close()


__all__ = ["RelayConnector"]

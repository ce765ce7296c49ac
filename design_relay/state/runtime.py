"""Typed runtime state objects for relay dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from design_relay.relay.hub import ChannelHub
    from design_relay.state.settings import RelaySettings
    from design_relay.handlers.connections import ConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    hub: ChannelHub
    connections: ConnectionManager
    settings: RelaySettings

    async def shutdown(self) -> None:
        try:
            channels = len(self.hub.channel_names())
            self.hub.clear()
            logger.info("relay: shut down (dropped %s channels)", channels)
        except Exception:
            logger.exception("relay shutdown failed")


__all__ = ["RuntimeDeps"]

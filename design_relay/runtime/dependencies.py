"""Runtime dependency construction (channel hub + admission control)."""

from __future__ import annotations

import logging

from design_relay.state import RuntimeDeps
from design_relay.relay.hub import ChannelHub
from design_relay.state.settings import RelaySettings
from design_relay.handlers.connections import ConnectionManager
from design_relay.handlers.websocket.errors import safe_send_text

from .settings import load_relay_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: RelaySettings | None = None) -> RuntimeDeps:
    settings = settings or load_relay_settings()

    hub = ChannelHub(send_fn=safe_send_text, notify_peers=settings.notify_peers)
    connections = ConnectionManager(max_connections=settings.max_concurrent_connections)
    logger.info(
        "runtime: relay capacity=%s notify_peers=%s",
        connections.capacity,
        settings.notify_peers,
    )

    return RuntimeDeps(hub=hub, connections=connections, settings=settings)


__all__ = ["RuntimeDeps", "build_runtime_deps"]

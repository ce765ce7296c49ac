"""Channel relay server (FastAPI + uvicorn) for design-tool plugin sessions."""

from __future__ import annotations

import argparse
import logging
import dataclasses
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from design_relay.config.relay import WS_ENDPOINT_PATH
from design_relay.state.settings import RelaySettings
from design_relay.runtime.logging import configure_logging
from design_relay.runtime.settings import load_relay_settings
from design_relay.runtime.dependencies import build_runtime_deps
from design_relay.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)


def create_app(settings: RelaySettings | None = None) -> FastAPI:
    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = build_runtime_deps(settings)
        app.state.runtime_deps = runtime_deps
        logger.info("runtime: ready")
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)

    @app.get("/health")
    async def health() -> dict[str, object]:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is None:
            return {"status": "starting"}
        return {
            "status": "ok",
            "connections": deps.connections.get_connection_count(),
            "channels": deps.hub.channel_names(),
        }

    @app.websocket(WS_ENDPOINT_PATH)
    async def websocket_endpoint(websocket: WebSocket) -> None:
        runtime_deps = getattr(app.state, "runtime_deps", None)
        if runtime_deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_websocket_connection(websocket, runtime_deps)

    return app


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Design-tool channel relay")
    p.add_argument("--host", default=None, help="Bind address (env RELAY_HOST)")
    p.add_argument("--port", type=int, default=None, help="Bind port (env RELAY_PORT)")
    p.add_argument("--ssl-key", default=None, help="TLS private key path (env SSL_KEY_PATH)")
    p.add_argument("--ssl-cert", default=None, help="TLS certificate path (env SSL_CERT_PATH)")
    p.add_argument("--notify-peers", action="store_true", help="Tell channel members when peers join or leave")
    return p.parse_args(argv)


def _apply_overrides(settings: RelaySettings, args: argparse.Namespace) -> RelaySettings:
    overrides = {
        "host": args.host,
        "port": args.port,
        "ssl_key_path": args.ssl_key,
        "ssl_cert_path": args.ssl_cert,
    }
    if args.notify_peers:
        overrides["notify_peers"] = True
    return dataclasses.replace(settings, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> None:
    configure_logging()
    settings = _apply_overrides(load_relay_settings(), parse_args(argv))

    scheme = "wss" if settings.ssl_enabled else "ws"
    logger.info("relay: listening on %s://%s:%s%s", scheme, settings.host, settings.port, WS_ENDPOINT_PATH)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        ssl_keyfile=settings.ssl_key_path if settings.ssl_enabled else None,
        ssl_certfile=settings.ssl_cert_path if settings.ssl_enabled else None,
        log_config=None,
    )


__all__ = ["create_app", "main", "parse_args"]

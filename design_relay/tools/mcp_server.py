"""MCP stdio server exposing the tool catalog over a relay connection."""

from __future__ import annotations

import sys
import asyncio
import argparse
import logging
import contextlib
import dataclasses
from typing import Any

from mcp.server import Server
from mcp.types import Tool, TextContent
from mcp.server.stdio import stdio_server

from design_relay.client.urls import build_relay_url
from design_relay.state.settings import ClientSettings
from design_relay.runtime.logging import configure_logging
from design_relay.client.connection import RelayConnector
from design_relay.runtime.settings import load_client_settings
from design_relay.client.command_client import CommandClient

from .runner import run_tool
from .catalog import list_tools as catalog_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "design-relay"


def build_server(client: CommandClient) -> Server:
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(name=spec.name, description=spec.description, inputSchema=spec.input_schema)
            for spec in catalog_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        return await run_tool(client, name, arguments)

    return server


async def serve(settings: ClientSettings) -> None:
    client = CommandClient(
        request_timeout_s=settings.request_timeout_s,
        progress_timeout_s=settings.progress_timeout_s,
    )
    connector = RelayConnector(
        client,
        url=build_relay_url(settings.server, settings.port),
        reconnect_delay_s=settings.reconnect_delay_s,
    )
    connector_task = asyncio.create_task(connector.run())
    server = build_server(client)
    logger.info("mcp: serving %s tools (relay %s)", len(catalog_tools()), connector.url)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await connector.stop()
        connector_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await connector_task


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Design relay MCP server (stdio)")
    p.add_argument("--server", default=None, help="Relay host or ws(s):// URL (env RELAY_SERVER)")
    p.add_argument("--port", type=int, default=None, help="Relay port for local hosts (env RELAY_PORT)")
    # The MCP host may append its own flags.
    args, _unknown = p.parse_known_args(argv)
    return args


def main(argv: list[str] | None = None) -> None:
    # stdout is the JSON-RPC channel; logs must go to stderr.
    configure_logging(stream=sys.stderr)
    args = parse_args(argv)
    overrides = {"server": args.server, "port": args.port}
    settings = dataclasses.replace(
        load_client_settings(), **{k: v for k, v in overrides.items() if v is not None}
    )
    asyncio.run(serve(settings))


__all__ = ["build_server", "main", "parse_args", "serve"]

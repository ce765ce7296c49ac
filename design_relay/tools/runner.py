"""Run catalog tools against a command client; every outcome becomes text."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from mcp.types import TextContent

from design_relay.state.tool import ToolSpec
from design_relay.config.protocol import JOIN_COMMAND
from design_relay.client.command_client import CommandClient

from .validation import validate_arguments
from .catalog import TOOL_SEND_COMMAND, TOOL_JOIN_CHANNEL, get_tool

logger = logging.getLogger(__name__)


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


def _error(spec: ToolSpec, exc: BaseException) -> list[TextContent]:
    return _text(f"Error {spec.action}: {exc}")


def format_result(result: Any) -> str:
    if isinstance(result, str):
        return result
    return orjson.dumps(result, option=orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS).decode("utf-8")


async def _join(client: CommandClient, channel: str) -> list[TextContent]:
    if not channel:
        return _text("Please provide a channel name to join:")
    await client.join_channel(channel)
    return _text(f"Successfully joined channel: {channel}")


def _passthrough_request(spec: ToolSpec, args: dict[str, Any]) -> tuple[str, dict[str, Any], float | None]:
    if spec.name == TOOL_SEND_COMMAND:
        command = args["command"].strip()
        if not command:
            raise ValueError("'command' must not be empty")
        timeout_ms = args.get("timeoutMs")
        timeout_s = timeout_ms / 1000.0 if timeout_ms and timeout_ms > 0 else None
        return command, dict(args.get("params") or {}), timeout_s
    return str(spec.command), {**args, **spec.fixed_params}, spec.timeout_s


async def run_tool(client: CommandClient, name: str, args: dict[str, Any] | None) -> list[TextContent]:
    spec = get_tool(name)
    if spec is None:
        return _text(f"Unknown tool: {name}")

    try:
        args = validate_arguments(spec, args)
        if spec.name == TOOL_JOIN_CHANNEL:
            return await _join(client, str(args.get("channel") or "").strip())

        command, params, timeout_s = _passthrough_request(spec, args)
        if command == JOIN_COMMAND:
            return await _join(client, str(params.get("channel") or "").strip())

        result = await client.call(command, params, timeout_s)
    except Exception as exc:
        logger.error("tool %s failed: %s", name, exc)
        return _error(spec, exc)
    return _text(format_result(result))


__all__ = ["format_result", "run_tool"]

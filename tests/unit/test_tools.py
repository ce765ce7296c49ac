from __future__ import annotations

from typing import Any

import orjson
import pytest
from mcp.server import Server

from design_relay.tools.runner import run_tool
from design_relay.tools.mcp_server import build_server
from design_relay.tools.catalog import CATALOG, SCAN_TIMEOUT_S
from design_relay.tools.validation import validate_arguments
from design_relay.errors import NoChannelError, RemoteCommandError, CommandTimeoutError


class _FakeClient:
    def __init__(self, *, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, dict[str, Any], float | None]] = []
        self.joined: list[str] = []

    async def call(self, command: str, params: dict[str, Any] | None = None, timeout_s: float | None = None) -> Any:
        self.calls.append((command, dict(params or {}), timeout_s))
        if self.error is not None:
            raise self.error
        return self.result

    async def join_channel(self, channel: str) -> Any:
        if self.error is not None:
            raise self.error
        self.joined.append(channel)
        return f"Connected to channel: {channel}"


def _text(content: list) -> str:
    assert len(content) == 1
    assert content[0].type == "text"
    return content[0].text


def test_catalog_entries_are_well_formed() -> None:
    expected = {
        "join_channel",
        "get_document_info",
        "get_selection",
        "read_my_design",
        "get_node_info",
        "scan_text_nodes",
        "send_command",
    }
    assert set(CATALOG) == expected
    for spec in CATALOG.values():
        schema = spec.input_schema
        assert schema["type"] == "object"
        assert set(schema.get("required", [])) <= set(schema["properties"])


def test_input_schema_uses_wire_names() -> None:
    node_schema = CATALOG["get_node_info"].input_schema
    assert node_schema["required"] == ["nodeId"]
    assert node_schema["properties"]["nodeId"]["type"] == "string"

    send_schema = CATALOG["send_command"].input_schema
    assert send_schema["required"] == ["command"]
    assert set(send_schema["properties"]) == {"command", "params", "timeoutMs"}


def test_validate_arguments() -> None:
    spec = CATALOG["get_node_info"]
    assert validate_arguments(spec, {"nodeId": "1:2", "extra": 1}) == {"nodeId": "1:2"}
    with pytest.raises(ValueError, match="'nodeId': Field required"):
        validate_arguments(spec, {})
    with pytest.raises(ValueError, match="'nodeId': Input should be a valid string"):
        validate_arguments(spec, {"nodeId": 12})
    with pytest.raises(ValueError, match="^arguments: "):
        validate_arguments(spec, ["nodeId"])  # type: ignore[arg-type]


def test_validate_send_command_nested_params() -> None:
    spec = CATALOG["send_command"]
    assert validate_arguments(spec, {"command": "get_styles"}) == {"command": "get_styles", "params": {}}
    with pytest.raises(ValueError, match="'params'"):
        validate_arguments(spec, {"command": "set_fill_color", "params": ["r", 1]})
    with pytest.raises(ValueError, match="'timeoutMs'"):
        validate_arguments(spec, {"command": "get_styles", "timeoutMs": True})
    with pytest.raises(ValueError, match="'timeoutMs'"):
        validate_arguments(spec, {"command": "get_styles", "timeoutMs": 0})


@pytest.mark.asyncio
async def test_passthrough_tool_returns_json_text() -> None:
    client = _FakeClient(result={"name": "Doc", "pages": 2})
    text = _text(await run_tool(client, "get_document_info", {}))
    assert orjson.loads(text) == {"name": "Doc", "pages": 2}
    assert client.calls == [("get_document_info", {}, None)]


@pytest.mark.asyncio
async def test_scan_text_nodes_uses_chunking_and_long_timeout() -> None:
    client = _FakeClient(result={"textNodes": []})
    await run_tool(client, "scan_text_nodes", {"nodeId": "1:1"})
    command, params, timeout_s = client.calls[0]
    assert command == "scan_text_nodes"
    assert params == {"nodeId": "1:1", "useChunking": True, "chunkSize": 10}
    assert timeout_s == SCAN_TIMEOUT_S


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (NoChannelError("get_selection"), "Error getting selection: Must join a channel"),
        (RemoteCommandError("r1", "get_selection", "Nothing selected"), "Error getting selection: Nothing selected"),
        (CommandTimeoutError("r1", "get_selection", 30.0), "Error getting selection: Request r1"),
    ],
)
async def test_failures_become_text(error: Exception, expected: str) -> None:
    text = _text(await run_tool(_FakeClient(error=error), "get_selection", {}))
    assert text.startswith(expected)


@pytest.mark.asyncio
async def test_invalid_arguments_become_text() -> None:
    client = _FakeClient()
    text = _text(await run_tool(client, "get_node_info", {}))
    assert text == "Error getting node info: 'nodeId': Field required"
    assert client.calls == []


@pytest.mark.asyncio
async def test_join_channel_tool() -> None:
    client = _FakeClient()
    assert _text(await run_tool(client, "join_channel", {})) == "Please provide a channel name to join:"
    assert _text(await run_tool(client, "join_channel", {"channel": "design-1"})) == (
        "Successfully joined channel: design-1"
    )
    assert client.joined == ["design-1"]

    failing = _FakeClient(error=RemoteCommandError("j1", "join", "refused"))
    assert _text(await run_tool(failing, "join_channel", {"channel": "x"})) == "Error joining channel: refused"


@pytest.mark.asyncio
async def test_send_command_passthrough() -> None:
    client = _FakeClient(result="ok")
    args = {"command": "set_fill_color", "params": {"nodeId": "1:1", "r": 1}, "timeoutMs": 1500}
    assert _text(await run_tool(client, "send_command", args)) == "ok"
    assert client.calls == [("set_fill_color", {"nodeId": "1:1", "r": 1}, 1.5)]

    await run_tool(client, "send_command", {"command": "join", "params": {"channel": "design-2"}})
    assert client.joined == ["design-2"]


@pytest.mark.asyncio
async def test_unknown_tool() -> None:
    assert _text(await run_tool(_FakeClient(), "delete_everything", {})) == "Unknown tool: delete_everything"


def test_build_server() -> None:
    assert isinstance(build_server(_FakeClient()), Server)  # type: ignore[arg-type]

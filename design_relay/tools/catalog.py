"""Assistant-facing tool catalog.

A representative slice of the plugin's command surface. Each entry is a thin
passthrough to ``CommandClient.call``; command-specific typing stays at this
boundary and the client core never looks at params or results.
"""

from __future__ import annotations

from design_relay.state.tool import ToolSpec

from .models import NoArgs, NodeArgs, SendCommandArgs, JoinChannelArgs

TOOL_JOIN_CHANNEL = "join_channel"
TOOL_SEND_COMMAND = "send_command"

# Chunked scans report progress per chunk; the base window only has to cover the first one.
SCAN_TIMEOUT_S = 60.0
SCAN_CHUNK_SIZE = 10

_TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name=TOOL_JOIN_CHANNEL,
        description="Join a specific channel to communicate with the design tool",
        args_model=JoinChannelArgs,
        command="join",
        action="joining channel",
    ),
    ToolSpec(
        name="get_document_info",
        description="Get detailed information about the current document",
        args_model=NoArgs,
        command="get_document_info",
        action="getting document info",
    ),
    ToolSpec(
        name="get_selection",
        description="Get information about the current selection",
        args_model=NoArgs,
        command="get_selection",
        action="getting selection",
    ),
    ToolSpec(
        name="read_my_design",
        description="Get detailed information about the current selection, including all node details",
        args_model=NoArgs,
        command="read_my_design",
        action="getting node info",
    ),
    ToolSpec(
        name="get_node_info",
        description="Get detailed information about a specific node",
        args_model=NodeArgs,
        command="get_node_info",
        action="getting node info",
    ),
    ToolSpec(
        name="scan_text_nodes",
        description="Scan all text nodes in the selected node (chunked, reports progress)",
        args_model=NodeArgs,
        command="scan_text_nodes",
        action="scanning text nodes",
        timeout_s=SCAN_TIMEOUT_S,
        fixed_params={"useChunking": True, "chunkSize": SCAN_CHUNK_SIZE},
    ),
    ToolSpec(
        name=TOOL_SEND_COMMAND,
        description="Send any plugin command by name with raw params",
        args_model=SendCommandArgs,
        command=None,
        action="sending command",
    ),
)

CATALOG: dict[str, ToolSpec] = {tool.name: tool for tool in _TOOLS}


def get_tool(name: str) -> ToolSpec | None:
    return CATALOG.get(name)


def list_tools() -> list[ToolSpec]:
    return list(_TOOLS)


__all__ = [
    "CATALOG",
    "SCAN_CHUNK_SIZE",
    "SCAN_TIMEOUT_S",
    "TOOL_JOIN_CHANNEL",
    "TOOL_SEND_COMMAND",
    "get_tool",
    "list_tools",
]

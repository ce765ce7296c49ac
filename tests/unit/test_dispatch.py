from __future__ import annotations

import pytest

from design_relay.errors import RemoteCommandError
from design_relay.client.dispatch import dispatch_frame
from design_relay.client.pending import PendingRequestTable
from design_relay.protocol.envelope import (
    build_join_ack,
    build_error_envelope,
    build_result_envelope,
    build_system_envelope,
    build_progress_envelope,
)


def _dispatch(frame: dict, table: PendingRequestTable) -> str:
    return dispatch_frame(frame, table, progress_timeout_s=5.0)


@pytest.mark.asyncio
async def test_result_resolves_matching_request() -> None:
    table = PendingRequestTable()
    fut = table.create("r1", "get_document_info", 5.0)
    assert _dispatch(build_result_envelope("r1", {"name": "Doc"}, channel="c"), table) == "resolved"
    assert await fut == {"name": "Doc"}
    assert len(table) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("result", [{}, 0, "", False, None, []])
async def test_falsy_results_still_resolve(result: object) -> None:
    table = PendingRequestTable()
    fut = table.create("r1", "cmd", 5.0)
    assert _dispatch(build_result_envelope("r1", result), table) == "resolved"
    assert await fut == result


@pytest.mark.asyncio
async def test_error_rejects_with_remote_text() -> None:
    table = PendingRequestTable()
    fut = table.create("r1", "get_node_info", 5.0)
    assert _dispatch(build_error_envelope("r1", "Node not found: 1:2"), table) == "rejected"
    with pytest.raises(RemoteCommandError) as exc_info:
        await fut
    assert str(exc_info.value) == "Node not found: 1:2"
    assert exc_info.value.command == "get_node_info"


@pytest.mark.asyncio
async def test_error_wins_over_result() -> None:
    table = PendingRequestTable()
    fut = table.create("r1", "cmd", 5.0)
    frame = {"message": {"id": "r1", "result": {"partial": True}, "error": "failed late"}}
    assert _dispatch(frame, table) == "rejected"
    with pytest.raises(RemoteCommandError):
        await fut


@pytest.mark.asyncio
async def test_unknown_ids_and_broadcasts_are_ignored() -> None:
    table = PendingRequestTable()
    fut = table.create("r1", "cmd", 5.0)

    frames = [
        build_result_envelope("someone-else", {"x": 1}),
        build_error_envelope("someone-else", "nope"),
        build_progress_envelope("someone-else", "c", {"status": "started"}),
        build_system_envelope("Please join a channel to start chatting"),
        build_system_envelope("Joined channel: c", "c"),
        {"type": "message", "channel": "c", "message": {"id": "r2", "command": "get_selection", "params": {}}},
        {"message": {"id": "r1"}},
        {},
    ]
    for frame in frames:
        assert _dispatch(frame, table) == "ignored"

    assert not fut.done()
    assert "r1" in table
    table.discard("r1")


@pytest.mark.asyncio
async def test_progress_frame_routes_to_progress_tracking() -> None:
    table = PendingRequestTable()
    fut = table.create("r1", "scan_text_nodes", 0.5)
    frame = build_progress_envelope("r1", "c", {"status": "in_progress", "progress": 10})
    assert _dispatch(frame, table) == "progress"
    entry = table.get("r1")
    assert entry is not None and entry.timeout_s == 5.0
    assert not fut.done()
    table.discard("r1")


@pytest.mark.asyncio
async def test_join_ack_resolves_join_request() -> None:
    table = PendingRequestTable()
    fut = table.create("j1", "join", 5.0)
    assert _dispatch(build_join_ack("j1", "design-1"), table) == "resolved"
    assert await fut == "Connected to channel: design-1"

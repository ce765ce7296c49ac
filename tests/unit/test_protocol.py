from __future__ import annotations

import json

import orjson
import pytest

from design_relay.protocol.parser import parse_frame
from design_relay.protocol.envelope import (
    dumps,
    build_join_ack,
    build_error_notice,
    build_join_envelope,
    build_error_envelope,
    build_result_envelope,
    build_command_envelope,
    build_progress_envelope,
)


def test_parse_frame_ok() -> None:
    raw = json.dumps({"type": " message ", "channel": "design-1 ", "message": {"id": "r1", "result": 1}})
    msg = parse_frame(raw)
    assert msg["type"] == "message"
    assert msg["channel"] == "design-1"
    assert msg["message"] == {"id": "r1", "result": 1}


def test_parse_frame_accepts_bytes() -> None:
    assert parse_frame(b'{"type":"join","channel":"c"}')["channel"] == "c"


def test_parse_frame_leaves_payload_untouched() -> None:
    payload = {"id": "r1", "command": "x", "params": {"a": [1, None, {"b": " keep "}]}}
    msg = parse_frame(json.dumps({"type": "message", "channel": "c", "message": payload}))
    assert msg["message"] == payload


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "{",
        json.dumps([]),
        json.dumps("text"),
        json.dumps({"type": 1}),
        json.dumps({"type": "message", "channel": ["c"]}),
        json.dumps({"type": "message", "id": 7}),
    ],
)
def test_parse_frame_invalid(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_frame(raw)


def test_command_envelope_carries_command_id() -> None:
    env = build_command_envelope("r1", "design-1", "get_node_info", {"nodeId": "1:2"})
    assert env == {
        "id": "r1",
        "type": "message",
        "channel": "design-1",
        "message": {"id": "r1", "command": "get_node_info", "params": {"nodeId": "1:2", "commandId": "r1"}},
    }


def test_command_envelope_does_not_mutate_params() -> None:
    params = {"nodeId": "1:2"}
    build_command_envelope("r1", "c", "get_node_info", params)
    assert params == {"nodeId": "1:2"}


def test_join_envelope_and_ack() -> None:
    assert build_join_envelope("j1", "design-1") == {"id": "j1", "type": "join", "channel": "design-1"}
    assert build_join_ack("j1", "design-1") == {
        "type": "system",
        "channel": "design-1",
        "message": {"id": "j1", "result": "Connected to channel: design-1"},
    }


def test_response_envelopes() -> None:
    assert build_result_envelope("r1", {"name": "Doc"}) == {"id": "r1", "message": {"id": "r1", "result": {"name": "Doc"}}}
    routed = build_error_envelope("r1", "boom", channel="c")
    assert routed["type"] == "message"
    assert routed["channel"] == "c"
    assert routed["message"] == {"id": "r1", "error": "boom"}


def test_progress_envelope_shape() -> None:
    env = build_progress_envelope("r1", "c", {"type": "command_progress", "status": "started", "progress": 0})
    assert env["type"] == "progress_update"
    assert env["id"] == "r1"
    assert env["message"]["data"]["commandId"] == "r1"
    assert env["message"]["data"]["status"] == "started"


def test_progress_envelope_defaults_data_type_without_channel() -> None:
    env = build_progress_envelope("r2", None, {"status": "in_progress", "progress": 40})
    assert "channel" not in env
    assert env["message"]["data"] == {
        "type": "command_progress",
        "commandId": "r2",
        "status": "in_progress",
        "progress": 40,
    }


def test_dumps_round_trips_through_parser() -> None:
    text = dumps(build_error_notice("missing_channel", "Channel name is required"))
    assert orjson.loads(text) == {"type": "error", "code": "missing_channel", "message": "Channel name is required"}
    assert parse_frame(text)["type"] == "error"

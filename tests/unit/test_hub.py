from __future__ import annotations

import orjson
import pytest

from design_relay.relay.hub import ChannelHub
from design_relay.config.protocol import SYSTEM_PEER_LEFT, SYSTEM_PEER_JOINED


class _FakeMember:
    def __init__(self, name: str, *, fail: bool = False) -> None:
        self.name = name
        self.fail = fail
        self.received: list[str] = []

    async def send_text(self, text: str) -> None:
        if self.fail:
            raise ConnectionError(f"{self.name} is gone")
        self.received.append(text)


async def _hub_with(*placements: tuple[_FakeMember, str], notify_peers: bool = False) -> ChannelHub:
    hub = ChannelHub(notify_peers=notify_peers)
    for member, channel in placements:
        hub.register(member)
        await hub.join(member, channel)
    return hub


@pytest.mark.asyncio
async def test_fan_out_is_scoped_to_channel_and_excludes_sender() -> None:
    a, b, c, d = (_FakeMember(n) for n in "abcd")
    hub = await _hub_with((a, "design-1"), (b, "design-1"), (c, "design-1"), (d, "design-2"))

    frame = '{"type":"message","channel":"design-1","message":{"id":"r1","command":"get_selection"}}'
    delivered = await hub.broadcast(a, "design-1", frame)

    assert delivered == 2
    assert b.received == [frame]
    assert c.received == [frame]
    assert d.received == []
    assert a.received == []


@pytest.mark.asyncio
async def test_frame_is_forwarded_byte_for_byte() -> None:
    a, b = _FakeMember("a"), _FakeMember("b")
    hub = await _hub_with((a, "c"), (b, "c"))
    frame = '{ "type" : "message", "channel":"c", "extra": [1,2,3] }'
    await hub.broadcast(a, "c", frame)
    assert b.received == [frame]


@pytest.mark.asyncio
async def test_no_recipients_is_a_silent_drop() -> None:
    a = _FakeMember("a")
    hub = await _hub_with((a, "solo"))
    assert await hub.broadcast(a, "solo", "{}") == 0
    assert await hub.broadcast(a, "nobody-here", "{}") == 0
    assert a.received == []


@pytest.mark.asyncio
async def test_failing_recipient_does_not_block_others() -> None:
    a, bad, c = _FakeMember("a"), _FakeMember("bad", fail=True), _FakeMember("c")
    hub = await _hub_with((a, "x"), (bad, "x"), (c, "x"))
    assert await hub.broadcast(a, "x", "frame") == 1
    assert c.received == ["frame"]


@pytest.mark.asyncio
async def test_joining_moves_connection_and_deletes_empty_channel() -> None:
    a, b = _FakeMember("a"), _FakeMember("b")
    hub = await _hub_with((a, "one"), (b, "two"))

    previous = await hub.join(a, "two")

    assert previous == "one"
    assert hub.channel_of(a) == "two"
    assert hub.channel_names() == ["two"]
    assert hub.members("two") == frozenset({a, b})


@pytest.mark.asyncio
async def test_rejoining_same_channel_is_a_no_op() -> None:
    a = _FakeMember("a")
    hub = await _hub_with((a, "one"))
    assert await hub.join(a, "one") is None
    assert hub.members("one") == frozenset({a})


@pytest.mark.asyncio
async def test_join_requires_channel_name() -> None:
    hub = ChannelHub()
    with pytest.raises(ValueError):
        await hub.join(_FakeMember("a"), "")


@pytest.mark.asyncio
async def test_unregister_removes_membership_quietly_by_default() -> None:
    a, b = _FakeMember("a"), _FakeMember("b")
    hub = await _hub_with((a, "c"), (b, "c"))

    assert await hub.unregister(a) == "c"
    assert hub.members("c") == frozenset({b})
    assert hub.connection_count() == 1
    assert b.received == []
    # Second unregister is inert.
    assert await hub.unregister(a) is None


@pytest.mark.asyncio
async def test_peer_notices_when_enabled() -> None:
    a, b = _FakeMember("a"), _FakeMember("b")
    hub = await _hub_with((a, "c"), (b, "c"), notify_peers=True)

    assert [orjson.loads(t)["message"] for t in a.received] == [SYSTEM_PEER_JOINED]

    await hub.unregister(b)
    assert orjson.loads(a.received[-1]) == {"type": "system", "message": SYSTEM_PEER_LEFT, "channel": "c"}


@pytest.mark.asyncio
async def test_custom_send_fn_reports_failures_as_undelivered() -> None:
    sent: list[tuple[str, str]] = []

    async def send(member: str, text: str) -> bool:
        sent.append((member, text))
        return member != "down"

    hub = ChannelHub(send_fn=send)
    for member in ("me", "up", "down"):
        hub.register(member)
        await hub.join(member, "c")

    assert await hub.broadcast("me", "c", "t") == 1
    assert sorted(m for m, _ in sent) == ["down", "up"]

    hub.clear()
    assert hub.channel_names() == []
    assert hub.connection_count() == 0

"""Frame parsing/validation for relay envelopes."""

from __future__ import annotations

from typing import Any

import orjson

from design_relay.config.protocol import KEY_ID, KEY_TYPE, KEY_CHANNEL


def _normalize_str_field(msg: dict[str, Any], key: str) -> None:
    value = msg.get(key)
    if value is None:
        return
    if not isinstance(value, str):
        raise ValueError(f"envelope '{key}' must be a string")
    msg[key] = value.strip()


def parse_frame(raw: str | bytes) -> dict[str, Any]:
    """Decode one text frame into an envelope dict.

    Only the outer shape is validated here; the nested ``message`` payload is
    left untouched so the relay can stay payload-agnostic.
    """
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("envelope must be a JSON object")

    for key in (KEY_TYPE, KEY_ID, KEY_CHANNEL):
        _normalize_str_field(msg, key)

    return msg


__all__ = ["parse_frame"]

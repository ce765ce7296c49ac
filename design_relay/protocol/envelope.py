"""Envelope builders for every frame the relay and its clients exchange."""

from __future__ import annotations

from typing import Any

import orjson

from design_relay.config.protocol import (
    KEY_ID,
    KEY_DATA,
    KEY_TYPE,
    KEY_ERROR,
    KEY_PARAMS,
    KEY_RESULT,
    TYPE_JOIN,
    KEY_CHANNEL,
    KEY_COMMAND,
    KEY_MESSAGE,
    TYPE_ERROR,
    TYPE_SYSTEM,
    TYPE_MESSAGE,
    KEY_COMMAND_ID,
    PROGRESS_DATA_TYPE,
    TYPE_PROGRESS_UPDATE,
)


def dumps(envelope: dict[str, Any]) -> str:
    return orjson.dumps(envelope).decode("utf-8")


def build_join_envelope(request_id: str, channel: str) -> dict[str, Any]:
    return {KEY_ID: request_id, KEY_TYPE: TYPE_JOIN, KEY_CHANNEL: channel}


def build_command_envelope(
    request_id: str,
    channel: str,
    command: str,
    params: dict[str, Any] | None = None,
) -> dict[str, Any]:
    # The sandbox reads the correlation id from params.commandId when it emits progress.
    merged = {**(params or {}), KEY_COMMAND_ID: request_id}
    return {
        KEY_ID: request_id,
        KEY_TYPE: TYPE_MESSAGE,
        KEY_CHANNEL: channel,
        KEY_MESSAGE: {KEY_ID: request_id, KEY_COMMAND: command, KEY_PARAMS: merged},
    }


def build_system_envelope(message: Any, channel: str | None = None) -> dict[str, Any]:
    envelope: dict[str, Any] = {KEY_TYPE: TYPE_SYSTEM, KEY_MESSAGE: message}
    if channel is not None:
        envelope[KEY_CHANNEL] = channel
    return envelope


def build_join_ack(request_id: str, channel: str) -> dict[str, Any]:
    return build_system_envelope({KEY_ID: request_id, KEY_RESULT: f"Connected to channel: {channel}"}, channel)


def build_error_notice(code: str, message: str) -> dict[str, Any]:
    return {KEY_TYPE: TYPE_ERROR, "code": code, KEY_MESSAGE: message}


def build_result_envelope(request_id: str, result: Any, channel: str | None = None) -> dict[str, Any]:
    envelope: dict[str, Any] = {KEY_ID: request_id, KEY_MESSAGE: {KEY_ID: request_id, KEY_RESULT: result}}
    if channel is not None:
        envelope[KEY_TYPE] = TYPE_MESSAGE
        envelope[KEY_CHANNEL] = channel
    return envelope


def build_error_envelope(request_id: str, error: str, channel: str | None = None) -> dict[str, Any]:
    envelope: dict[str, Any] = {KEY_ID: request_id, KEY_MESSAGE: {KEY_ID: request_id, KEY_ERROR: error}}
    if channel is not None:
        envelope[KEY_TYPE] = TYPE_MESSAGE
        envelope[KEY_CHANNEL] = channel
    return envelope


def build_progress_envelope(request_id: str, channel: str | None, data: dict[str, Any]) -> dict[str, Any]:
    envelope: dict[str, Any] = {
        KEY_ID: request_id,
        KEY_TYPE: TYPE_PROGRESS_UPDATE,
        KEY_MESSAGE: {KEY_DATA: {KEY_TYPE: PROGRESS_DATA_TYPE, KEY_COMMAND_ID: request_id, **data}},
    }
    if channel is not None:
        envelope[KEY_CHANNEL] = channel
    return envelope


__all__ = [
    "build_command_envelope",
    "build_error_envelope",
    "build_error_notice",
    "build_join_ack",
    "build_join_envelope",
    "build_progress_envelope",
    "build_result_envelope",
    "build_system_envelope",
    "dumps",
]

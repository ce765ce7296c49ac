"""Pydantic argument models for the assistant-facing tools.

Field names are snake_case; the aliases are the camelCase keys the plugin
expects, and they are what both the published JSON schema and the validated
params use.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, BaseModel, ConfigDict

_ARGS_CONFIG = ConfigDict(frozen=True, strict=True, extra="ignore", populate_by_name=True)


class NoArgs(BaseModel):
    model_config = _ARGS_CONFIG


class JoinChannelArgs(BaseModel):
    model_config = _ARGS_CONFIG

    # Empty is allowed: the tool answers with a prompt instead of failing.
    channel: str = Field(default="", description="The name of the channel to join")


class NodeArgs(BaseModel):
    model_config = _ARGS_CONFIG

    node_id: str = Field(..., min_length=1, alias="nodeId", description="The ID of the node")


class SendCommandArgs(BaseModel):
    model_config = _ARGS_CONFIG

    command: str = Field(..., min_length=1, description="Plugin command name")
    params: dict[str, Any] = Field(default_factory=dict, description="Command parameters")
    timeout_ms: int | None = Field(
        default=None,
        gt=0,
        alias="timeoutMs",
        description="Request timeout in milliseconds",
    )


__all__ = ["JoinChannelArgs", "NoArgs", "NodeArgs", "SendCommandArgs"]

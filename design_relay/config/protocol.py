"""Relay envelope protocol keys and constants."""

from __future__ import annotations

# Envelope keys
KEY_ID = "id"
KEY_TYPE = "type"
KEY_CHANNEL = "channel"
KEY_MESSAGE = "message"

# Nested message keys
KEY_COMMAND = "command"
KEY_PARAMS = "params"
KEY_RESULT = "result"
KEY_ERROR = "error"
KEY_DATA = "data"
KEY_COMMAND_ID = "commandId"

# Envelope types
TYPE_JOIN = "join"
TYPE_MESSAGE = "message"
TYPE_SYSTEM = "system"
TYPE_ERROR = "error"
TYPE_PROGRESS_UPDATE = "progress_update"

# Progress payload type (message.data.type)
PROGRESS_DATA_TYPE = "command_progress"

PROGRESS_STATUS_STARTED = "started"
PROGRESS_STATUS_IN_PROGRESS = "in_progress"
PROGRESS_STATUS_COMPLETED = "completed"
PROGRESS_STATUS_ERROR = "error"

PROGRESS_STATUSES = frozenset(
    {
        PROGRESS_STATUS_STARTED,
        PROGRESS_STATUS_IN_PROGRESS,
        PROGRESS_STATUS_COMPLETED,
        PROGRESS_STATUS_ERROR,
    }
)

# The only command exempt from the joined-channel precondition.
JOIN_COMMAND = "join"

# System notices
SYSTEM_GREETING = "Please join a channel to start chatting"
SYSTEM_PEER_JOINED = "A new user has joined the channel"
SYSTEM_PEER_LEFT = "A user has left the channel"

__all__ = [
    "JOIN_COMMAND",
    "KEY_CHANNEL",
    "KEY_COMMAND",
    "KEY_COMMAND_ID",
    "KEY_DATA",
    "KEY_ERROR",
    "KEY_ID",
    "KEY_MESSAGE",
    "KEY_PARAMS",
    "KEY_RESULT",
    "KEY_TYPE",
    "PROGRESS_DATA_TYPE",
    "PROGRESS_STATUSES",
    "PROGRESS_STATUS_COMPLETED",
    "PROGRESS_STATUS_ERROR",
    "PROGRESS_STATUS_IN_PROGRESS",
    "PROGRESS_STATUS_STARTED",
    "SYSTEM_GREETING",
    "SYSTEM_PEER_JOINED",
    "SYSTEM_PEER_LEFT",
    "TYPE_ERROR",
    "TYPE_JOIN",
    "TYPE_MESSAGE",
    "TYPE_PROGRESS_UPDATE",
    "TYPE_SYSTEM",
]

"""Session phases for the assistant-facing relay connection."""

from __future__ import annotations

from enum import Enum


class SessionPhase(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    JOINED = "joined"


__all__ = ["SessionPhase"]

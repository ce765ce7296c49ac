"""Shared error types for the relay client."""

from __future__ import annotations

from dataclasses import dataclass


class RelayError(Exception):
    """Base class for failures surfaced to callers of the command client."""


@dataclass(frozen=True, slots=True)
class NotConnectedError(RelayError):
    """Raised synchronously when no live relay connection exists."""

    command: str

    def __str__(self) -> str:
        return f"Not connected to relay; cannot send '{self.command}'"


@dataclass(frozen=True, slots=True)
class NoChannelError(RelayError):
    """Raised synchronously when a non-join command is sent before joining a channel."""

    command: str

    def __str__(self) -> str:
        return f"Must join a channel before sending commands (got '{self.command}')"


@dataclass(frozen=True, slots=True)
class ConnectionClosedError(RelayError):
    """Raised for every in-flight request when the relay connection goes away."""

    request_id: str
    command: str

    def __str__(self) -> str:
        return f"Connection closed before '{self.command}' completed (request {self.request_id})"


@dataclass(frozen=True, slots=True)
class CommandTimeoutError(RelayError):
    """Raised when no terminal response arrives within the active timeout window."""

    request_id: str
    command: str
    timeout_s: float
    after_progress: bool = False

    def __str__(self) -> str:
        window = "of inactivity after progress" if self.after_progress else ""
        suffix = f" {window}" if window else ""
        return f"Request {self.request_id} ('{self.command}') timed out after {self.timeout_s:g}s{suffix}"


@dataclass(frozen=True, slots=True)
class RemoteCommandError(RelayError):
    """Raised when the sandbox answers a request with an error."""

    request_id: str
    command: str
    message: str

    def __str__(self) -> str:
        return self.message


__all__ = [
    "CommandTimeoutError",
    "ConnectionClosedError",
    "NoChannelError",
    "NotConnectedError",
    "RelayError",
    "RemoteCommandError",
]

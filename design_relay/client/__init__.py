from .urls import build_relay_url
from .session import RelaySession
from .pending import PendingRequestTable
from .dispatch import dispatch_frame
from .progress import parse_progress, record_progress
from .connection import RelayConnector
from .command_client import CommandClient

__all__ = [
    "CommandClient",
    "PendingRequestTable",
    "RelayConnector",
    "RelaySession",
    "build_relay_url",
    "dispatch_frame",
    "parse_progress",
    "record_progress",
]

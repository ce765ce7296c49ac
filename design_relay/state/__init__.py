from .tool import ToolSpec
from .runtime import RuntimeDeps
from .pending import PendingRequest
from .session import SessionPhase
from .progress import CommandProgress
from .settings import AppSettings, RelaySettings, ClientSettings

__all__ = [
    "AppSettings",
    "ClientSettings",
    "CommandProgress",
    "PendingRequest",
    "RelaySettings",
    "RuntimeDeps",
    "SessionPhase",
    "ToolSpec",
]

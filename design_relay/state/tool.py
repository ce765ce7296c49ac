"""Assistant-facing tool definition (dataclass only)."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass

from pydantic import BaseModel


@dataclass(frozen=True, slots=True)
class ToolSpec:
    name: str
    description: str
    args_model: type[BaseModel]
    # None means the command name comes from the arguments (generic passthrough).
    command: str | None
    # Gerund used in failure text: "Error <action>: <message>".
    action: str
    timeout_s: float | None = None
    fixed_params: dict[str, Any] = field(default_factory=dict)

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.args_model.model_json_schema()


__all__ = ["ToolSpec"]

"""Tool argument validation through each catalog entry's pydantic model."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from design_relay.state.tool import ToolSpec


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    if not loc:
        return f"arguments: {first['msg']}"
    return f"'{loc}': {first['msg']}"


def validate_arguments(spec: ToolSpec, args: dict[str, Any] | None) -> dict[str, Any]:
    """Return the validated arguments keyed by wire name; raises ValueError on the first problem.

    Undeclared keys are dropped and unset optional keys are omitted.
    """
    try:
        model = spec.args_model.model_validate({} if args is None else args)
    except ValidationError as exc:
        raise ValueError(_describe(exc)) from exc
    return model.model_dump(by_alias=True, exclude_none=True)


__all__ = ["validate_arguments"]

"""Tool selection directive.

Either one of the plain modes ``"none" | "auto" | "required"`` or an object
tagged on ``type`` that forces a specific function, a specific custom tool,
or restricts the model to a subset of the declared tools.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field

from ..wire import WireModel

ToolChoiceMode = Literal["none", "auto", "required"]


class NamedFunction(WireModel):
    name: str


class NamedCustom(WireModel):
    name: str


class ToolChoiceFunction(WireModel):
    type: Literal["function"] = "function"
    function: NamedFunction


class ToolChoiceCustom(WireModel):
    type: Literal["custom"] = "custom"
    custom: NamedCustom


class AllowedTools(WireModel):
    """Subset of tools the model may pick from.

    ``tools`` entries use the same shape as ``tool_choice`` objects, e.g.
    ``{"type": "function", "function": {"name": "get_weather"}}``.
    """

    mode: Literal["auto", "required"]
    tools: List[Dict[str, Any]]


class ToolChoiceAllowedTools(WireModel):
    type: Literal["allowed_tools"] = "allowed_tools"
    allowed_tools: AllowedTools


ToolChoiceSpecific = Annotated[
    Union[ToolChoiceFunction, ToolChoiceCustom, ToolChoiceAllowedTools],
    Field(discriminator="type"),
]

ToolChoice = Union[ToolChoiceMode, ToolChoiceSpecific]


def referenced_tool_names(choice: Any) -> List[str]:
    """Return the tool names a choice points at (empty for plain modes)."""
    if isinstance(choice, ToolChoiceFunction):
        return [choice.function.name]
    if isinstance(choice, ToolChoiceCustom):
        return [choice.custom.name]
    if isinstance(choice, ToolChoiceAllowedTools):
        names: List[str] = []
        for entry in choice.allowed_tools.tools:
            name = _entry_name(entry)
            if name:
                names.append(name)
        return names
    return []


def _entry_name(entry: Dict[str, Any]) -> Optional[str]:
    kind = entry.get("type")
    inner = entry.get(kind) if isinstance(kind, str) else None
    if isinstance(inner, dict) and isinstance(inner.get("name"), str):
        return inner["name"]
    name = entry.get("name")
    return name if isinstance(name, str) else None


__all__ = [
    "ToolChoiceMode",
    "NamedFunction",
    "NamedCustom",
    "ToolChoiceFunction",
    "ToolChoiceCustom",
    "AllowedTools",
    "ToolChoiceAllowedTools",
    "ToolChoiceSpecific",
    "ToolChoice",
    "referenced_tool_names",
]

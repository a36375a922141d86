"""Tool definitions offered to the model.

Function tools describe their parameters with a JSON Schema object. Custom
tools take free text, optionally constrained by a Lark or regex grammar.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import Field

from ..wire import WireModel


class FunctionDefinition(WireModel):
    """Callable function exposed to the model.

    Attributes:
        name: Function name (a-z, A-Z, 0-9, underscores and dashes).
        description: What the function does; used by the model to decide
            when to call it.
        parameters: JSON Schema object describing the arguments. An empty
            mapping declares a function without parameters.
        strict: Ask the vendor to enforce the schema exactly.
    """

    name: str
    description: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)
    strict: Optional[bool] = None


class TextFormat(WireModel):
    type: Literal["text"] = "text"


class Grammar(WireModel):
    definition: str
    syntax: Literal["lark", "regex"]


class GrammarFormat(WireModel):
    type: Literal["grammar"] = "grammar"
    grammar: Grammar


CustomToolFormat = Annotated[Union[TextFormat, GrammarFormat], Field(discriminator="type")]


class CustomToolDefinition(WireModel):
    name: str
    description: Optional[str] = None
    format: Optional[CustomToolFormat] = None


class FunctionTool(WireModel):
    type: Literal["function"] = "function"
    function: FunctionDefinition


class CustomTool(WireModel):
    type: Literal["custom"] = "custom"
    custom: CustomToolDefinition


RequestTool = Annotated[Union[FunctionTool, CustomTool], Field(discriminator="type")]


def tool_name(tool: Union[FunctionTool, CustomTool]) -> str:
    """Return the name a tool is addressed by in ``tool_choice``."""
    if isinstance(tool, FunctionTool):
        return tool.function.name
    return tool.custom.name


__all__ = [
    "FunctionDefinition",
    "TextFormat",
    "Grammar",
    "GrammarFormat",
    "CustomToolFormat",
    "CustomToolDefinition",
    "FunctionTool",
    "CustomTool",
    "RequestTool",
    "tool_name",
]

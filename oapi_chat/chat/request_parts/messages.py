"""Request-side chat messages.

``Message`` is a tagged union on ``role``; each variant carries only the
fields the API accepts for that participant. Assistant messages may replay
earlier tool calls, which are themselves tagged on ``type``.

DeepSeek "chat prefix completion" is expressed as an assistant message with
``prefix=True`` (and, for reasoner models, ``reasoning_content``); ``prefix``
is left out of the payload when false.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import Field, SerializationInfo, SerializerFunctionWrapHandler, model_serializer

from ..wire import WireModel


class ToolCallFunction(WireModel):
    """Function invocation replayed in an assistant message.

    ``arguments`` is the JSON-encoded argument string exactly as the model
    produced it.
    """

    name: str
    arguments: str


class ToolCallCustom(WireModel):
    name: str
    input: str


class FunctionToolCallParam(WireModel):
    type: Literal["function"] = "function"
    id: str
    function: ToolCallFunction


class CustomToolCallParam(WireModel):
    type: Literal["custom"] = "custom"
    id: str
    custom: ToolCallCustom


AssistantToolCall = Annotated[
    Union[FunctionToolCallParam, CustomToolCallParam],
    Field(discriminator="type"),
]


class SystemMessage(WireModel):
    role: Literal["system"] = "system"
    content: str
    name: Optional[str] = None


class UserMessage(WireModel):
    role: Literal["user"] = "user"
    content: str
    name: Optional[str] = None


class AssistantMessage(WireModel):
    """Assistant turn, either prior output or a prefix for continuation.

    ``content`` is optional when ``tool_calls`` is present.
    """

    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    refusal: Optional[str] = None
    name: Optional[str] = None
    prefix: bool = False
    reasoning_content: Optional[str] = None
    tool_calls: Optional[List[AssistantToolCall]] = None

    @model_serializer(mode="wrap")
    def _omit_false_prefix(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> Dict[str, Any]:
        data = handler(self)
        if not self.prefix:
            data.pop("prefix", None)
        return data


class ToolMessage(WireModel):
    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str


class FunctionMessage(WireModel):
    """Deprecated function-result message; kept for older models."""

    role: Literal["function"] = "function"
    content: str
    name: str


class DeveloperMessage(WireModel):
    role: Literal["developer"] = "developer"
    content: str
    name: Optional[str] = None


Message = Annotated[
    Union[
        SystemMessage,
        UserMessage,
        AssistantMessage,
        ToolMessage,
        FunctionMessage,
        DeveloperMessage,
    ],
    Field(discriminator="role"),
]


__all__ = [
    "ToolCallFunction",
    "ToolCallCustom",
    "FunctionToolCallParam",
    "CustomToolCallParam",
    "AssistantToolCall",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "FunctionMessage",
    "DeveloperMessage",
    "Message",
]

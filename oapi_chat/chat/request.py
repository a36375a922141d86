"""Chat request model public surface.

Re-exports the implementations under ``oapi_chat.chat.request_parts`` to keep
a stable import path.
"""

from .request_parts.messages import (
    AssistantMessage,
    AssistantToolCall,
    CustomToolCallParam,
    DeveloperMessage,
    FunctionMessage,
    FunctionToolCallParam,
    Message,
    SystemMessage,
    ToolCallCustom,
    ToolCallFunction,
    ToolMessage,
    UserMessage,
)
from .request_parts.request_body import RequestBody
from .request_parts.response_format import (
    ExtraBody,
    JSONSchema,
    ResponseFormat,
    ResponseFormatJsonObject,
    ResponseFormatJsonSchema,
    ResponseFormatText,
    StreamOptions,
)
from .request_parts.tool_choice import (
    AllowedTools,
    NamedCustom,
    NamedFunction,
    ToolChoice,
    ToolChoiceAllowedTools,
    ToolChoiceCustom,
    ToolChoiceFunction,
    ToolChoiceMode,
)
from .request_parts.tools import (
    CustomTool,
    CustomToolDefinition,
    FunctionDefinition,
    FunctionTool,
    Grammar,
    GrammarFormat,
    RequestTool,
    TextFormat,
)

__all__ = [
    "AssistantMessage",
    "AssistantToolCall",
    "CustomToolCallParam",
    "DeveloperMessage",
    "FunctionMessage",
    "FunctionToolCallParam",
    "Message",
    "SystemMessage",
    "ToolCallCustom",
    "ToolCallFunction",
    "ToolMessage",
    "UserMessage",
    "RequestBody",
    "ExtraBody",
    "JSONSchema",
    "ResponseFormat",
    "ResponseFormatJsonObject",
    "ResponseFormatJsonSchema",
    "ResponseFormatText",
    "StreamOptions",
    "AllowedTools",
    "NamedCustom",
    "NamedFunction",
    "ToolChoice",
    "ToolChoiceAllowedTools",
    "ToolChoiceCustom",
    "ToolChoiceFunction",
    "ToolChoiceMode",
    "CustomTool",
    "CustomToolDefinition",
    "FunctionDefinition",
    "FunctionTool",
    "Grammar",
    "GrammarFormat",
    "RequestTool",
    "TextFormat",
]

"""Chat completions schema model (requests, streaming chunks, completions).

The full set of entities lives in ``oapi_chat.chat.request`` and
``oapi_chat.chat.response``; the most used ones are re-exported here.
"""

from .request import (
    AssistantMessage,
    DeveloperMessage,
    ExtraBody,
    FunctionTool,
    Message,
    RequestBody,
    ResponseFormat,
    StreamOptions,
    SystemMessage,
    ToolChoice,
    ToolMessage,
    UserMessage,
)
from .response import (
    ChatCompletion,
    ChatCompletionChunk,
    ChoiceDelta,
    CompletionUsage,
    FinishReason,
    ToolCall,
)
from .wire import WireModel

__all__ = [
    "WireModel",
    "AssistantMessage",
    "DeveloperMessage",
    "ExtraBody",
    "FunctionTool",
    "Message",
    "RequestBody",
    "ResponseFormat",
    "StreamOptions",
    "SystemMessage",
    "ToolChoice",
    "ToolMessage",
    "UserMessage",
    "ChatCompletion",
    "ChatCompletionChunk",
    "ChoiceDelta",
    "CompletionUsage",
    "FinishReason",
    "ToolCall",
]

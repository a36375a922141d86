"""Chat response model public surface.

Re-exports the implementations under ``oapi_chat.chat.response_parts``.
"""

from .response_parts.chunk import ChatCompletionChunk, ChoiceDelta, ChunkChoice, FragmentKind
from .response_parts.common import (
    ChoiceLogprobs,
    CompletionTokensDetails,
    CompletionUsage,
    CustomCall,
    CustomCallDelta,
    FinishReason,
    FunctionCall,
    FunctionCallDelta,
    PromptTokensDetails,
    ResponseRole,
    TokenLogprob,
    ToolCall,
    ToolCallDelta,
    TopLogprob,
)
from .response_parts.completion import ChatCompletion, Choice, ResponseMessage

__all__ = [
    "ChatCompletionChunk",
    "ChoiceDelta",
    "ChunkChoice",
    "FragmentKind",
    "ChoiceLogprobs",
    "CompletionTokensDetails",
    "CompletionUsage",
    "CustomCall",
    "CustomCallDelta",
    "FinishReason",
    "FunctionCall",
    "FunctionCallDelta",
    "PromptTokensDetails",
    "ResponseRole",
    "TokenLogprob",
    "ToolCall",
    "ToolCallDelta",
    "TopLogprob",
    "ChatCompletion",
    "Choice",
    "ResponseMessage",
]

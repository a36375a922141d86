"""Response entities shared by streaming chunks and full completions."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from ...base.errors import ClientError
from ..wire import WireModel


class FinishReason(str, Enum):
    """Why the model stopped generating.

    ``FUNCTION_CALL`` only appears in non-streaming responses of older models.
    """

    LENGTH = "length"
    STOP = "stop"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    INSUFFICIENT_SYSTEM_RESOURCE = "insufficient_system_resource"
    FUNCTION_CALL = "function_call"


ResponseRole = Literal["assistant", "user", "system", "tool"]


class PromptTokensDetails(WireModel):
    cached_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None


class CompletionTokensDetails(WireModel):
    reasoning_tokens: Optional[int] = None
    audio_tokens: Optional[int] = None
    accepted_prediction_tokens: Optional[int] = None
    rejected_prediction_tokens: Optional[int] = None


class CompletionUsage(WireModel):
    """Token accounting for a request.

    ``prompt_cache_hit_tokens`` / ``prompt_cache_miss_tokens`` are DeepSeek
    context-cache counters; other vendors report caching through
    ``prompt_tokens_details.cached_tokens``.
    """

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    prompt_cache_hit_tokens: Optional[int] = None
    prompt_cache_miss_tokens: Optional[int] = None
    prompt_tokens_details: Optional[PromptTokensDetails] = None
    completion_tokens_details: Optional[CompletionTokensDetails] = None

    def as_tokens(self) -> Dict[str, int]:
        """Return the ``{prompt, completion, total}`` mapping used in log events."""
        return {
            "prompt": self.prompt_tokens,
            "completion": self.completion_tokens,
            "total": self.total_tokens,
        }


class TopLogprob(WireModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None


class TokenLogprob(WireModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None
    top_logprobs: List[TopLogprob] = []


class ChoiceLogprobs(WireModel):
    content: Optional[List[TokenLogprob]] = None
    reasoning_content: Optional[List[TokenLogprob]] = None
    refusal: Optional[List[TokenLogprob]] = None


class FunctionCall(WireModel):
    name: str
    arguments: str = ""


class CustomCall(WireModel):
    name: str
    input: str = ""


class ToolCall(WireModel):
    """A complete tool call in a non-streaming response.

    Arguments are kept as the exact string the model produced; use
    :meth:`parsed_arguments` to decode them.
    """

    id: str
    type: Literal["function", "custom"] = "function"
    function: Optional[FunctionCall] = None
    custom: Optional[CustomCall] = None

    def parsed_arguments(self) -> Dict[str, Any]:
        """Decode the function arguments as a JSON object.

        An empty argument string decodes to ``{}``.

        Raises:
            ClientError: ``DESERIALIZATION`` when the call carries no function
                or the arguments are not a JSON object.
        """
        if self.function is None:
            raise ClientError.deserialization(f"tool call {self.id} has no function arguments")
        raw = self.function.arguments.strip()
        if not raw:
            return {}
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ClientError.deserialization(str(exc), raw=exc) from exc
        if not isinstance(value, dict):
            raise ClientError.deserialization(f"tool call {self.id} arguments are not a JSON object")
        return value


class FunctionCallDelta(WireModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class CustomCallDelta(WireModel):
    name: Optional[str] = None
    input: Optional[str] = None


class ToolCallDelta(WireModel):
    """Incremental tool call fragment; fragments merge by ``index``.

    Function calls stream ``function.arguments`` and custom tool calls stream
    ``custom.input``, both as text fragments.
    """

    index: int = 0
    id: Optional[str] = None
    type: Optional[Literal["function", "custom"]] = None
    function: Optional[FunctionCallDelta] = None
    custom: Optional[CustomCallDelta] = None


__all__ = [
    "FinishReason",
    "ResponseRole",
    "PromptTokensDetails",
    "CompletionTokensDetails",
    "CompletionUsage",
    "TopLogprob",
    "TokenLogprob",
    "ChoiceLogprobs",
    "FunctionCall",
    "CustomCall",
    "ToolCall",
    "FunctionCallDelta",
    "CustomCallDelta",
    "ToolCallDelta",
]

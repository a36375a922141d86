"""Non-streaming ``chat.completion`` entities."""

from __future__ import annotations

from typing import List, Optional

from ..wire import WireModel
from .common import ChoiceLogprobs, CompletionUsage, FinishReason, ResponseRole, ToolCall


class ResponseMessage(WireModel):
    role: ResponseRole = "assistant"
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    refusal: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class Choice(WireModel):
    """One generated alternative; ``finish_reason`` is always present."""

    index: int
    finish_reason: FinishReason
    message: ResponseMessage
    logprobs: Optional[ChoiceLogprobs] = None


class ChatCompletion(WireModel):
    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: List[Choice]
    service_tier: Optional[str] = None
    system_fingerprint: Optional[str] = None
    usage: Optional[CompletionUsage] = None

    @property
    def text(self) -> Optional[str]:
        """Content of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content


__all__ = ["ResponseMessage", "Choice", "ChatCompletion"]

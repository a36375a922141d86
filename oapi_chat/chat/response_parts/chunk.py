"""Streaming ``chat.completion.chunk`` entities.

A delta normally carries either visible ``content`` or ``reasoning_content``
(DeepSeek reasoner, Qwen thinking mode). Deltas carrying both are accepted;
``fragment`` then reports the reasoning text and accumulation keeps both.

The first chunk usually announces ``role``; the finish chunk carries
``finish_reason``; with ``stream_options.include_usage`` a final chunk has no
choices and only ``usage`` (DeepSeek may also attach usage to the finish chunk).
"""

from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from ..wire import WireModel
from .common import ChoiceLogprobs, CompletionUsage, FinishReason, ResponseRole, ToolCallDelta

FragmentKind = Literal["content", "reasoning"]


class ChoiceDelta(WireModel):
    role: Optional[ResponseRole] = None
    content: Optional[str] = None
    reasoning_content: Optional[str] = None
    refusal: Optional[str] = None
    tool_calls: Optional[List[ToolCallDelta]] = None

    @property
    def fragment(self) -> Optional[Tuple[FragmentKind, str]]:
        """Return ``(kind, text)`` for the text this delta carries, if any.

        Non-empty reasoning wins over content.
        """
        if self.reasoning_content:
            return "reasoning", self.reasoning_content
        if self.content is not None:
            return "content", self.content
        if self.reasoning_content is not None:
            return "reasoning", self.reasoning_content
        return None


class ChunkChoice(WireModel):
    index: int = 0
    delta: ChoiceDelta = ChoiceDelta()
    logprobs: Optional[ChoiceLogprobs] = None
    finish_reason: Optional[FinishReason] = None


class ChatCompletionChunk(WireModel):
    id: str
    created: int
    model: str
    object: Optional[str] = None
    system_fingerprint: Optional[str] = None
    service_tier: Optional[str] = None
    choices: List[ChunkChoice] = []
    usage: Optional[CompletionUsage] = None

    @property
    def content(self) -> str:
        """Concatenated visible content of all choices in this chunk."""
        return "".join(c.delta.content or "" for c in self.choices)

    @property
    def reasoning(self) -> str:
        return "".join(c.delta.reasoning_content or "" for c in self.choices)

    @property
    def finish_reason(self) -> Optional[FinishReason]:
        for c in self.choices:
            if c.finish_reason is not None:
                return c.finish_reason
        return None


__all__ = ["FragmentKind", "ChoiceDelta", "ChunkChoice", "ChatCompletionChunk"]

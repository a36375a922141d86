"""Fold a chunk sequence into one non-streaming completion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ...chat.response import (
    ChatCompletion,
    ChatCompletionChunk,
    Choice,
    CompletionUsage,
    CustomCall,
    FinishReason,
    FunctionCall,
    ResponseMessage,
    ToolCall,
)
from ..errors import ClientError


@dataclass
class _ToolCallBuffer:
    id: str = ""
    type: str = "function"
    name: str = ""
    arguments: List[str] = field(default_factory=list)

    def to_tool_call(self) -> ToolCall:
        text = "".join(self.arguments)
        if self.type == "custom":
            return ToolCall(id=self.id, type="custom", custom=CustomCall(name=self.name, input=text))
        return ToolCall(id=self.id, type="function", function=FunctionCall(name=self.name, arguments=text))


@dataclass
class _ChoiceBuffer:
    role: str = "assistant"
    content: List[str] = field(default_factory=list)
    reasoning: List[str] = field(default_factory=list)
    refusal: List[str] = field(default_factory=list)
    saw_content: bool = False
    saw_reasoning: bool = False
    finish_reason: Optional[FinishReason] = None
    tool_calls: Dict[int, _ToolCallBuffer] = field(default_factory=dict)

    def to_choice(self, index: int) -> Choice:
        tool_calls = [tc.to_tool_call() for _, tc in sorted(self.tool_calls.items())]
        message = ResponseMessage(
            role=self.role,
            content="".join(self.content) if self.saw_content else None,
            reasoning_content="".join(self.reasoning) if self.saw_reasoning else None,
            refusal="".join(self.refusal) if self.refusal else None,
            tool_calls=tool_calls or None,
        )
        return Choice(
            index=index,
            finish_reason=self.finish_reason or FinishReason.STOP,
            message=message,
        )


def accumulate_chunks(chunks: Iterable[ChatCompletionChunk]) -> ChatCompletion:
    """Accumulate streamed chunks into a :class:`ChatCompletion`.

    - Concatenates content, reasoning and refusal text per choice index.
    - Merges tool-call deltas by their ``index``; argument (or custom
      input) fragments are joined in arrival order.
    - Keeps the last finish reason seen per choice (``stop`` if none arrived)
      and the last usage block seen.

    Raises:
        ClientError: ``DESERIALIZATION`` when ``chunks`` is empty.
    """
    first: Optional[ChatCompletionChunk] = None
    usage: Optional[CompletionUsage] = None
    fingerprint: Optional[str] = None
    service_tier: Optional[str] = None
    buffers: Dict[int, _ChoiceBuffer] = {}

    for chunk in chunks:
        if first is None:
            first = chunk
        if chunk.usage is not None:
            usage = chunk.usage
        fingerprint = chunk.system_fingerprint or fingerprint
        service_tier = chunk.service_tier or service_tier
        for choice in chunk.choices:
            buf = buffers.setdefault(choice.index, _ChoiceBuffer())
            delta = choice.delta
            if delta.role:
                buf.role = delta.role
            if delta.content is not None:
                buf.saw_content = True
                buf.content.append(delta.content)
            if delta.reasoning_content is not None:
                buf.saw_reasoning = True
                buf.reasoning.append(delta.reasoning_content)
            if delta.refusal:
                buf.refusal.append(delta.refusal)
            for tc in delta.tool_calls or ():
                tbuf = buf.tool_calls.setdefault(tc.index, _ToolCallBuffer())
                if tc.id:
                    tbuf.id = tc.id
                if tc.type:
                    tbuf.type = tc.type
                if tc.function is not None:
                    if tc.function.name:
                        tbuf.name += tc.function.name
                    if tc.function.arguments:
                        tbuf.arguments.append(tc.function.arguments)
                if tc.custom is not None:
                    tbuf.type = "custom"
                    if tc.custom.name:
                        tbuf.name += tc.custom.name
                    if tc.custom.input:
                        tbuf.arguments.append(tc.custom.input)
            if choice.finish_reason is not None:
                buf.finish_reason = choice.finish_reason

    if first is None:
        raise ClientError.deserialization("cannot accumulate an empty chunk sequence")

    return ChatCompletion(
        id=first.id,
        created=first.created,
        model=first.model,
        choices=[buf.to_choice(i) for i, buf in sorted(buffers.items())],
        service_tier=service_tier,
        system_fingerprint=fingerprint,
        usage=usage,
    )


__all__ = ["accumulate_chunks"]

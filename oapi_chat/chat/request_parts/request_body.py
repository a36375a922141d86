"""Chat completion request body.

Purpose
-------
One flat record covering the OpenAI chat/completions parameters plus the
DeepSeek and Qwen extensions. Every optional field defaults to absent and is
never sent as ``null``; ``stream`` is always sent.

Vendor extensions
-----------------
``extra_body`` (typed) and ``extra_body_map`` (open mapping) are merged into
the top level of the JSON body. Declared standard fields win on key
collision, then typed ``extra_body`` values, then the open map.

Failure Modes
-------------
Construction raises ``pydantic.ValidationError`` on malformed values. The
``stream`` flag is checked against the invoked path by ``base.post`` before
any network call.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from ..wire import WireModel
from .messages import Message
from .response_format import ExtraBody, ResponseFormat, StreamOptions
from .tool_choice import ToolChoice, referenced_tool_names
from .tools import RequestTool, tool_name

_EXTENSION_FIELDS = {"extra_body", "extra_body_map"}


class RequestBody(WireModel):
    """Parameters of a ``POST /chat/completions`` call.

    ``model`` may be left empty when the client supplies a default.
    ``stop`` accepts a single string or a list of strings (tried in that
    order).
    """

    messages: List[Message]
    model: str = ""
    stream: bool = False
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    max_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None
    response_format: Optional[ResponseFormat] = None
    safety_identifier: Optional[str] = None
    seed: Optional[int] = None
    n: Optional[int] = None
    stop: Optional[Union[str, List[str]]] = Field(default=None, union_mode="left_to_right")
    stream_options: Optional[StreamOptions] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    tools: Optional[List[RequestTool]] = None
    tool_choice: Optional[ToolChoice] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    extra_body: Optional[ExtraBody] = None
    extra_body_map: Optional[Dict[str, Any]] = None

    def is_streaming(self) -> bool:
        return self.stream

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body with vendor extensions flattened in."""
        payload = self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude=_EXTENSION_FIELDS,
        )
        if self.extra_body is not None:
            for key, value in self.extra_body.to_payload().items():
                payload.setdefault(key, value)
        if self.extra_body_map:
            for key, value in self.extra_body_map.items():
                if value is not None:
                    payload.setdefault(key, value)
        return payload

    def unknown_tool_choice(self) -> Optional[str]:
        """Return a tool named by ``tool_choice`` that is not in ``tools``.

        Plain modes never name a tool. The check is advisory; the request is
        sent unchanged either way.
        """
        declared = {tool_name(t) for t in self.tools or ()}
        for name in referenced_tool_names(self.tool_choice):
            if name not in declared:
                return name
        return None


__all__ = ["RequestBody"]

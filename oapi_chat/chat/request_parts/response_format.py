"""Output format selection and small request option records."""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import Field

from ..wire import WireModel


class JSONSchema(WireModel):
    """Structured output contract for ``json_schema`` mode.

    The schema body is exposed as ``schema_`` in Python (``schema`` would
    shadow a pydantic attribute) and serialized as ``schema``.
    """

    name: str
    description: Optional[str] = None
    schema_: Dict[str, Any] = Field(default_factory=dict, alias="schema")
    strict: Optional[bool] = None


class ResponseFormatText(WireModel):
    type: Literal["text"] = "text"


class ResponseFormatJsonObject(WireModel):
    type: Literal["json_object"] = "json_object"


class ResponseFormatJsonSchema(WireModel):
    type: Literal["json_schema"] = "json_schema"
    json_schema: JSONSchema


ResponseFormat = Annotated[
    Union[ResponseFormatText, ResponseFormatJsonObject, ResponseFormatJsonSchema],
    Field(discriminator="type"),
]


class StreamOptions(WireModel):
    """Only valid with ``stream=True``.

    ``include_usage`` requests one extra chunk before ``[DONE]`` whose
    ``choices`` is empty and whose ``usage`` covers the whole request.
    """

    include_usage: bool = True


class ExtraBody(WireModel):
    """Typed vendor extension fields (Qwen thinking controls, ``top_k``).

    Fields are flattened into the top level of the request body.
    """

    enable_thinking: Optional[bool] = None
    thinking_budget: Optional[int] = None
    top_k: Optional[int] = None


__all__ = [
    "JSONSchema",
    "ResponseFormatText",
    "ResponseFormatJsonObject",
    "ResponseFormatJsonSchema",
    "ResponseFormat",
    "StreamOptions",
    "ExtraBody",
]

"""Request body wire shape: absent fields, unions, aliases and vendor extensions."""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from oapi_chat.chat.request import (
    AllowedTools,
    AssistantMessage,
    CustomTool,
    CustomToolDefinition,
    ExtraBody,
    FunctionDefinition,
    FunctionTool,
    FunctionToolCallParam,
    Grammar,
    GrammarFormat,
    JSONSchema,
    NamedFunction,
    RequestBody,
    ResponseFormatJsonSchema,
    StreamOptions,
    SystemMessage,
    ToolCallFunction,
    ToolChoiceAllowedTools,
    ToolChoiceFunction,
    ToolMessage,
    UserMessage,
)


def _body(**kw) -> RequestBody:
    return RequestBody(messages=[UserMessage(content="hi")], model="deepseek-chat", **kw)


def test_minimal_payload_has_no_nulls():
    payload = _body().to_payload()
    assert payload == {  # nosec B101
        "messages": [{"role": "user", "content": "hi"}],
        "model": "deepseek-chat",
        "stream": False,
    }
    assert "null" not in json.dumps(payload)  # nosec B101


def test_messages_tagged_by_role_round_trip_from_mapping():
    body = RequestBody.from_mapping(
        {
            "model": "m",
            "messages": [
                {"role": "system", "content": "Reply briefly"},
                {"role": "user", "content": "What's your name?"},
                {"role": "tool", "content": "22C", "tool_call_id": "call_1"},
            ],
        }
    )
    assert isinstance(body.messages[0], SystemMessage)  # nosec B101
    assert isinstance(body.messages[2], ToolMessage)  # nosec B101


def test_prefix_omitted_unless_set():
    plain = AssistantMessage(content="Hello").to_payload()
    assert plain == {"role": "assistant", "content": "Hello"}  # nosec B101
    prefixed = AssistantMessage(content="```python\n", prefix=True).to_payload()
    assert prefixed["prefix"] is True  # nosec B101
    nested = RequestBody(
        messages=[UserMessage(content="write code"), AssistantMessage(content="```", prefix=False)],
    ).to_payload()
    assert "prefix" not in nested["messages"][1]  # nosec B101


def test_assistant_tool_call_replay():
    msg = AssistantMessage(
        tool_calls=[FunctionToolCallParam(id="call_1", function=ToolCallFunction(name="f", arguments='{"a":1}'))]
    )
    payload = msg.to_payload()
    assert payload["tool_calls"] == [  # nosec B101
        {"type": "function", "id": "call_1", "function": {"name": "f", "arguments": '{"a":1}'}}
    ]
    assert "content" not in payload  # nosec B101


@pytest.mark.parametrize("stop", ["\n\n", ["END", "STOP"]])
def test_stop_accepts_string_or_list(stop):
    assert _body(stop=stop).to_payload()["stop"] == stop  # nosec B101


def test_response_format_schema_alias():
    fmt = ResponseFormatJsonSchema(
        json_schema=JSONSchema(name="answer", schema={"type": "object", "properties": {"a": {"type": "string"}}}, strict=True)
    )
    payload = _body(response_format=fmt).to_payload()["response_format"]
    assert payload["type"] == "json_schema"  # nosec B101
    assert payload["json_schema"]["schema"]["type"] == "object"  # nosec B101
    assert "schema_" not in payload["json_schema"]  # nosec B101


def test_tools_and_tool_choice_serialization():
    tools = [
        FunctionTool(function=FunctionDefinition(name="get_weather", description="Weather", parameters={"type": "object"})),
        CustomTool(custom=CustomToolDefinition(name="sql", format=GrammarFormat(grammar=Grammar(definition="start: x", syntax="lark")))),
    ]
    payload = _body(tools=tools, tool_choice=ToolChoiceFunction(function=NamedFunction(name="get_weather"))).to_payload()
    assert payload["tools"][0] == {  # nosec B101
        "type": "function",
        "function": {"name": "get_weather", "description": "Weather", "parameters": {"type": "object"}},
    }
    assert payload["tools"][1]["custom"]["format"]["grammar"]["syntax"] == "lark"  # nosec B101
    assert payload["tool_choice"] == {"type": "function", "function": {"name": "get_weather"}}  # nosec B101
    assert _body(tool_choice="required").to_payload()["tool_choice"] == "required"  # nosec B101


def test_function_without_parameters_sends_empty_object():
    payload = _body(tools=[FunctionTool(function=FunctionDefinition(name="now"))]).to_payload()
    assert payload["tools"][0]["function"]["parameters"] == {}  # nosec B101


def test_unknown_tool_choice_is_reported_not_rejected():
    tools = [FunctionTool(function=FunctionDefinition(name="a"))]
    body = _body(tools=tools, tool_choice=ToolChoiceFunction(function=NamedFunction(name="b")))
    assert body.unknown_tool_choice() == "b"  # nosec B101
    allowed = ToolChoiceAllowedTools(
        allowed_tools=AllowedTools(mode="auto", tools=[{"type": "function", "function": {"name": "a"}}])
    )
    assert _body(tools=tools, tool_choice=allowed).unknown_tool_choice() is None  # nosec B101
    assert _body(tool_choice="auto").unknown_tool_choice() is None  # nosec B101


def test_extensions_flattened_and_standard_fields_win():
    body = _body(
        stream=True,
        stream_options=StreamOptions(),
        top_p=0.5,
        extra_body=ExtraBody(enable_thinking=True, thinking_budget=512),
        extra_body_map={"top_p": 0.9, "enable_thinking": False, "vl_high_resolution_images": True, "skip": None},
    )
    payload = body.to_payload()
    assert payload["top_p"] == 0.5  # nosec B101
    assert payload["enable_thinking"] is True and payload["thinking_budget"] == 512  # nosec B101
    assert payload["vl_high_resolution_images"] is True  # nosec B101
    assert "skip" not in payload and "extra_body" not in payload and "extra_body_map" not in payload  # nosec B101
    assert payload["stream_options"] == {"include_usage": True}  # nosec B101
    assert body.is_streaming()  # nosec B101


def test_invalid_role_rejected_at_construction():
    with pytest.raises(ValidationError):
        RequestBody.model_validate({"messages": [{"role": "robot", "content": "x"}]})

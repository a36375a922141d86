from __future__ import annotations

import json

import pytest

from oapi_chat.base.errors import ClientError, ErrorKind
from oapi_chat.base.streaming import accumulate_chunks
from oapi_chat.chat.response import ChatCompletionChunk, FinishReason
from oapi_chat.tests.fixtures_data import DEEPSEEK_CHUNKS, DEEPSEEK_DELTAS, QWEN_CHUNKS, QWEN_DELTAS


def _chunks(payloads):
    return [ChatCompletionChunk.parse(p) for p in payloads]


def _chunk(delta, *, finish=None, index=0, usage=None):
    body = {
        "id": "acc-1",
        "created": 7,
        "model": "m",
        "choices": [{"index": index, "delta": delta, "finish_reason": finish}],
    }
    if usage is not None:
        body["usage"] = usage
    return ChatCompletionChunk.parse(json.dumps(body))


def test_deepseek_stream_accumulates_to_full_text():
    completion = accumulate_chunks(_chunks(DEEPSEEK_CHUNKS))
    assert completion.id == "1f633d8bfc032625086f14113c411638"  # nosec B101
    assert completion.text == "".join(DEEPSEEK_DELTAS)  # nosec B101
    assert completion.choices[0].finish_reason is FinishReason.STOP  # nosec B101
    assert completion.usage.total_tokens == 26  # nosec B101
    assert completion.system_fingerprint == "fp_a49d71b8a1"  # nosec B101


def test_qwen_usage_only_chunk_is_kept():
    completion = accumulate_chunks(_chunks(QWEN_CHUNKS))
    assert completion.text == "".join(QWEN_DELTAS)  # nosec B101
    assert completion.usage.prompt_tokens == 22  # nosec B101
    assert completion.usage.prompt_tokens_details.cached_tokens == 0  # nosec B101
    assert len(completion.choices) == 1  # nosec B101


def test_reasoning_kept_apart_from_content():
    completion = accumulate_chunks(
        [
            _chunk({"role": "assistant", "reasoning_content": "think "}),
            _chunk({"reasoning_content": "more"}),
            _chunk({"content": "answer"}, finish="stop"),
        ]
    )
    msg = completion.choices[0].message
    assert msg.reasoning_content == "think more"  # nosec B101
    assert msg.content == "answer"  # nosec B101


def test_tool_call_fragments_merge_by_index():
    completion = accumulate_chunks(
        [
            _chunk({"tool_calls": [{"index": 0, "id": "call_a", "type": "function", "function": {"name": "get_weather", "arguments": ""}}]}),
            _chunk({"tool_calls": [{"index": 1, "id": "call_b", "type": "function", "function": {"name": "get_time", "arguments": "{}"}}]}),
            _chunk({"tool_calls": [{"index": 0, "function": {"arguments": '{"city": '}}]}),
            _chunk({"tool_calls": [{"index": 0, "function": {"arguments": '"Hangzhou"}'}}]}),
            _chunk({}, finish="tool_calls"),
        ]
    )
    choice = completion.choices[0]
    assert choice.finish_reason is FinishReason.TOOL_CALLS  # nosec B101
    assert choice.message.content is None  # nosec B101
    calls = choice.message.tool_calls
    assert [c.id for c in calls] == ["call_a", "call_b"]  # nosec B101
    assert calls[0].parsed_arguments() == {"city": "Hangzhou"}  # nosec B101
    assert calls[1].function.name == "get_time"  # nosec B101


def test_custom_tool_call_input_fragments_merge():
    completion = accumulate_chunks(
        [
            _chunk({"tool_calls": [{"index": 0, "id": "call_1", "type": "custom", "custom": {"name": "grep", "input": "fo"}}]}),
            _chunk({"tool_calls": [{"index": 0, "custom": {"input": "o"}}]}),
            _chunk({}, finish="tool_calls"),
        ]
    )
    (call,) = completion.choices[0].message.tool_calls
    assert call.type == "custom" and call.function is None  # nosec B101
    assert call.custom.name == "grep" and call.custom.input == "foo"  # nosec B101


def test_delta_with_both_texts_keeps_both():
    completion = accumulate_chunks([_chunk({"content": "a", "reasoning_content": "b"}), _chunk({"content": "c"}, finish="stop")])
    message = completion.choices[0].message
    assert message.content == "ac" and message.reasoning_content == "b"  # nosec B101


def test_missing_finish_reason_defaults_to_stop():
    completion = accumulate_chunks([_chunk({"content": "partial"})])
    assert completion.choices[0].finish_reason is FinishReason.STOP  # nosec B101


def test_empty_sequence_rejected():
    with pytest.raises(ClientError) as info:
        accumulate_chunks([])
    assert info.value.kind is ErrorKind.DESERIALIZATION  # nosec B101

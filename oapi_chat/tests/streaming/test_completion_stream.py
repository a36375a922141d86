"""CompletionStream state machine: termination, per-item policies, resource release."""
from __future__ import annotations

import httpx
import pytest

from oapi_chat.base.errors import ClientError, ErrorKind
from oapi_chat.base.http import RawResponse
from oapi_chat.base.streaming import ChunkErrorPolicy, CompletionStream, StreamState
from oapi_chat.chat.response import ChatCompletionChunk
from oapi_chat.tests.conftest import ClosingIterator
from oapi_chat.tests.fixtures_data import (
    DEEPSEEK_CHUNKS,
    DEEPSEEK_DELTAS,
    minimal_chunk,
    sse_body,
    split_every,
)


def _stream(body_chunks, policy=ChunkErrorPolicy.RAISE, **kw):
    it = ClosingIterator(body_chunks, **kw)
    raw = RawResponse(200, stream=it, closer=it.close)
    return CompletionStream(raw, ChatCompletionChunk, policy=policy), it


def test_sentinel_terminates_without_yielding():
    stream, it = _stream([sse_body([minimal_chunk("a"), minimal_chunk("b")])])
    texts = [c.content for c in stream]
    assert texts == ["a", "b"]  # nosec B101
    assert stream.state is StreamState.DONE  # nosec B101
    assert stream.sentinel_seen is True  # nosec B101
    assert it.closed  # nosec B101


def test_events_after_sentinel_are_not_read():
    body = sse_body([minimal_chunk("a")]) + b"data: not json\n\n"
    stream, _ = _stream([body])
    assert [c.content for c in stream] == ["a"]  # nosec B101
    assert stream.error is None  # nosec B101


def test_end_without_sentinel_is_clean(log_capture):
    stream, it = _stream([sse_body([minimal_chunk("a")], done=False)])
    assert [c.content for c in stream] == ["a"]  # nosec B101
    assert stream.state is StreamState.DONE and stream.sentinel_seen is False  # nosec B101
    assert it.closed  # nosec B101
    end = log_capture.events("stream.end")
    assert end and end[-1]["sentinel"] is False  # nosec B101


def test_wire_order_preserved_across_network_chunking():
    body = sse_body(DEEPSEEK_CHUNKS)
    stream, _ = _stream(split_every(body, 5))
    chunks = list(stream)
    assert len(chunks) == len(DEEPSEEK_CHUNKS)  # nosec B101
    assert "".join(c.content for c in chunks) == "".join(DEEPSEEK_DELTAS)  # nosec B101


def test_raise_policy_fails_on_bad_item_and_releases():
    body = sse_body([minimal_chunk("a"), "{not json", minimal_chunk("c")])
    stream, it = _stream([body])
    assert next(stream).content == "a"  # nosec B101
    with pytest.raises(ClientError) as info:
        next(stream)
    assert info.value.kind is ErrorKind.DESERIALIZATION  # nosec B101
    assert stream.state is StreamState.FAILED  # nosec B101
    assert it.closed  # nosec B101
    assert list(stream) == []  # nosec B101


def test_skip_policy_isolates_bad_item(log_capture):
    body = sse_body([minimal_chunk("a"), '{"id": 1}', minimal_chunk("c")])
    stream, _ = _stream([body], policy=ChunkErrorPolicy.SKIP)
    assert [c.content for c in stream] == ["a", "c"]  # nosec B101
    assert stream.state is StreamState.DONE  # nosec B101
    assert stream.metrics.errors == 1 and stream.metrics.emitted == 2  # nosec B101
    errs = log_capture.events("stream.chunk.error")
    assert len(errs) == 1 and errs[0]["error_kind"] == "deserialization"  # nosec B101


def test_events_report_item_errors_in_band():
    body = sse_body([minimal_chunk("one"), "garbage", minimal_chunk("three")])
    stream, _ = _stream([body])
    events = list(stream.events())
    assert len(events) == 3  # nosec B101
    assert events[0].chunk.content == "one" and not events[0].is_error()  # nosec B101
    assert events[1].is_error() and not events[1].fatal  # nosec B101
    assert events[1].error.kind is ErrorKind.DESERIALIZATION  # nosec B101
    assert events[2].chunk.content == "three"  # nosec B101
    assert stream.state is StreamState.DONE  # nosec B101


def test_transport_failure_mid_stream_is_fatal_stream_error():
    body = sse_body([minimal_chunk("a")], done=False)
    stream, it = _stream([body, b"never"], fail_after=1, exc=httpx.ReadError("reset"))
    assert next(stream).content == "a"  # nosec B101
    with pytest.raises(ClientError) as info:
        next(stream)
    assert info.value.kind is ErrorKind.STREAM  # nosec B101
    assert stream.state is StreamState.FAILED and it.closed  # nosec B101


def test_transport_failure_reported_as_final_fatal_event():
    body = sse_body([minimal_chunk("a")], done=False)
    stream, _ = _stream([body], fail_after=1, exc=OSError("reset"))
    events = list(stream.events())
    assert [e.fatal for e in events] == [False, True]  # nosec B101
    assert events[-1].error.kind is ErrorKind.STREAM  # nosec B101


def test_invalid_utf8_is_sse_parse_failure():
    stream, _ = _stream([b"data: \xff\n\n"])
    with pytest.raises(ClientError) as info:
        list(stream)
    assert info.value.kind is ErrorKind.SSE_PARSE  # nosec B101
    assert stream.error is info.value  # nosec B101


@pytest.mark.parametrize("policy", [ChunkErrorPolicy.RAISE, ChunkErrorPolicy.SKIP])
def test_unexpected_decoder_error_fails_and_releases(policy):
    body = sse_body([minimal_chunk("a")], done=False)
    stream, it = _stream([body, b"never"], policy=policy, fail_after=1, exc=ValueError("bad frame"))
    assert next(stream).content == "a"  # nosec B101
    with pytest.raises(ClientError) as info:
        next(stream)
    assert info.value.kind is ErrorKind.SSE_PARSE  # nosec B101
    assert stream.state is StreamState.FAILED and it.closed  # nosec B101


def test_non_ascii_retry_field_does_not_end_stream():
    stream, it = _stream([b"retry: \xc2\xb2\n\n" + sse_body([minimal_chunk("a")])], policy=ChunkErrorPolicy.SKIP)
    assert [c.content for c in stream] == ["a"]  # nosec B101
    assert stream.state is StreamState.DONE and it.closed  # nosec B101


def test_keepalive_blank_data_skipped():
    stream, _ = _stream([b"data:\n\n" + sse_body([minimal_chunk("a")])])
    assert [c.content for c in stream] == ["a"]  # nosec B101


def test_close_mid_stream_releases_connection(log_capture):
    body = sse_body([minimal_chunk("a"), minimal_chunk("b")])
    stream, it = _stream([body])
    with stream:
        assert next(stream).content == "a"  # nosec B101
    assert it.closed and stream.finished  # nosec B101
    assert list(stream) == []  # nosec B101
    end = log_capture.events("stream.end")
    assert end[-1]["cancelled"] is True  # nosec B101
    stream.close()


def test_lazy_decoding_pulls_one_event_at_a_time():
    body_parts = [sse_body([minimal_chunk("a")], done=False), sse_body([minimal_chunk("b")])]
    stream, it = _stream(body_parts)
    next(stream)
    assert it.pulled == 1  # nosec B101


def test_metrics_capture_usage_and_first_chunk():
    stream, _ = _stream([sse_body(DEEPSEEK_CHUNKS)])
    list(stream)
    m = stream.metrics
    assert m.emitted == 11  # nosec B101
    assert m.tokens == {"prompt": 17, "completion": 9, "total": 26}  # nosec B101
    assert m.time_to_first_chunk_ms is not None and m.total_duration_ms is not None  # nosec B101
    assert stream.context.response_id == "1f633d8bfc032625086f14113c411638"  # nosec B101


def test_stream_without_body_rejected():
    raw = RawResponse(200, text="{}")
    with pytest.raises(ClientError) as info:
        CompletionStream(raw, ChatCompletionChunk)
    assert info.value.kind is ErrorKind.RESPONSE  # nosec B101
    assert raw.closed  # nosec B101

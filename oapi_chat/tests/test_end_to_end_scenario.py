"""End-to-end streaming call over the real httpx transport.

The network is replaced by ``httpx.MockTransport``; everything above it
(headers, body serialization, SSE framing, chunk decoding, termination and
connection release) runs as in production.
"""
from __future__ import annotations

import json

import httpx

from oapi_chat import DeepSeekClient, HttpxTransport, StreamState, accumulate_chunks
from oapi_chat.chat.request import RequestBody, StreamOptions, SystemMessage, UserMessage
from oapi_chat.tests.fixtures_data import DEEPSEEK_CHUNKS, DEEPSEEK_DELTAS, sse_body, split_every


class _ReleasingStream(httpx.SyncByteStream):
    def __init__(self, chunks):
        self._chunks = chunks
        self.closed = False

    def __iter__(self):
        yield from self._chunks

    def close(self) -> None:
        self.closed = True


def test_deepseek_streaming_conversation(log_capture):
    seen = {}
    body = _ReleasingStream(split_every(sse_body(DEEPSEEK_CHUNKS), 37))

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = dict(request.headers)
        seen["json"] = json.loads(request.content)
        return httpx.Response(200, headers={"content-type": "text/event-stream"}, stream=body)

    transport = HttpxTransport(httpx.Client(transport=httpx.MockTransport(handler)))
    client = DeepSeekClient("sk-e2e", transport=transport)
    request = RequestBody(
        messages=[SystemMessage(content="Reply briefly"), UserMessage(content="What's your name?")],
        stream=True,
        stream_options=StreamOptions(include_usage=True),
    )

    with client.stream(request) as stream:
        chunks = list(stream)

    assert seen["url"] == "https://api.deepseek.com/chat/completions"  # nosec B101
    assert seen["headers"]["authorization"] == "Bearer sk-e2e"  # nosec B101
    assert seen["headers"]["accept"] == "text/event-stream"  # nosec B101
    assert seen["json"] == {  # nosec B101
        "messages": [
            {"role": "system", "content": "Reply briefly"},
            {"role": "user", "content": "What's your name?"},
        ],
        "model": "deepseek-chat",
        "stream": True,
        "stream_options": {"include_usage": True},
    }

    assert [c.content for c in chunks[1:-1]] == DEEPSEEK_DELTAS  # nosec B101
    assert chunks[-1].finish_reason.value == "stop"  # nosec B101
    assert stream.state is StreamState.DONE and stream.sentinel_seen  # nosec B101
    assert body.closed  # nosec B101

    completion = accumulate_chunks(chunks)
    assert completion.text == "Hello! How can I assist you today?"  # nosec B101

    names = [e["event"] for e in log_capture.events()]
    assert names.index("stream.start") < names.index("stream.end")  # nosec B101
    assert log_capture.events("stream.start")[-1]["state"] == "connecting"  # nosec B101
    end = log_capture.events("stream.end")[-1]
    assert end["emitted_count"] == 11 and end["sentinel"] is True  # nosec B101
    assert end["state"] == "done"  # nosec B101
    assert end["tokens"] == {"prompt": 17, "completion": 9, "total": 26}  # nosec B101

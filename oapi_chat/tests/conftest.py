"""Pytest configuration for the oapi_chat test suite.

Provides an in-memory transport, structured log capture on the shared
``oapi_chat`` logger and pool/config teardown between tests.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

import pytest

from oapi_chat.base.errors import ClientError
from oapi_chat.base.http import RawResponse, close_all_clients
from oapi_chat.config import clear_config_cache

_VENDOR_ENV = (
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "DEEPSEEK_API_KEY",
    "DEEPSEEK_BASE_URL",
    "DEEPSEEK_MODEL",
    "QWEN_API_KEY",
    "QWEN_BASE_URL",
    "QWEN_MODEL",
    "DASHSCOPE_API_KEY",
    "OAPI_CONFIG_FILE",
    "OAPI_HTTP_TIMEOUT_SECONDS",
    "OAPI_CONNECT_TIMEOUT_SECONDS",
    "OAPI_LOG_LEVEL",
)


@dataclass
class SentRequest:
    url: str
    api_key: str
    body: Dict[str, Any]
    streaming: bool
    multipart: bool = False
    files: Dict[str, Any] = field(default_factory=dict)


class ClosingIterator:
    """Byte iterator that records whether its owner closed it."""

    def __init__(self, chunks: List[bytes], fail_after: Optional[int] = None, exc: Optional[BaseException] = None):
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self._exc = exc
        self.pulled = 0
        self.closed = False

    def __iter__(self) -> "ClosingIterator":
        return self

    def __next__(self) -> bytes:
        if self._fail_after is not None and self.pulled >= self._fail_after:
            raise self._exc or OSError("connection reset")
        if self.pulled >= len(self._chunks):
            raise StopIteration
        self.pulled += 1
        return self._chunks[self.pulled - 1]

    def close(self) -> None:
        self.closed = True


class FakeTransport:
    """Transport double returning canned responses and counting calls.

    ``text`` serves non-streaming calls; ``chunks`` serves streaming calls;
    ``error`` is raised from ``send`` instead of returning.
    """

    def __init__(
        self,
        *,
        text: str = "",
        chunks: Optional[List[bytes]] = None,
        error: Optional[ClientError] = None,
        fail_after: Optional[int] = None,
        stream_exc: Optional[BaseException] = None,
    ) -> None:
        self.text = text
        self.chunks = chunks or []
        self.error = error
        self.fail_after = fail_after
        self.stream_exc = stream_exc
        self.calls: List[SentRequest] = []
        self.last_stream: Optional[ClosingIterator] = None
        self.last_response: Optional[RawResponse] = None

    def send(self, url: str, api_key: str, body: Mapping[str, Any], *, streaming: bool = False) -> RawResponse:
        # round-trip through JSON to catch non-serializable payloads
        self.calls.append(SentRequest(url, api_key, json.loads(json.dumps(dict(body))), streaming))
        if self.error is not None:
            raise self.error
        if streaming:
            it = ClosingIterator(self.chunks, self.fail_after, self.stream_exc)
            self.last_stream = it
            self.last_response = RawResponse(200, {"content-type": "text/event-stream"}, stream=it, closer=it.close)
        else:
            self.last_response = RawResponse(200, {"content-type": "application/json"}, text=self.text)
        return self.last_response

    def send_multipart(self, url, api_key, data, files) -> RawResponse:
        self.calls.append(SentRequest(url, api_key, dict(data), False, multipart=True, files=dict(files)))
        if self.error is not None:
            raise self.error
        self.last_response = RawResponse(200, {}, text=self.text)
        return self.last_response


class _ListHandler(logging.Handler):
    """Capture formatted JSON payloads of log records."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self, name: Optional[str] = None) -> List[Dict[str, Any]]:
        out = []
        for r in self.records:
            try:
                payload = json.loads(r.getMessage())
            except ValueError:
                continue
            if name is None or payload.get("event") == name:
                out.append(payload)
        return out


@pytest.fixture()
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def log_capture() -> Iterator[_ListHandler]:
    """Attach a collecting handler to the shared ``oapi_chat`` logger."""
    from oapi_chat.base.logging import get_logger

    base = get_logger()
    handler = _ListHandler()
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear vendor variables, cached config files and pooled clients."""
    for name in _VENDOR_ENV:
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
    close_all_clients()

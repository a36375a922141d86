"""Generic request execution over a :class:`Transport`.

Purpose
-------
One code path serves every request/response pair: any request exposing
``is_streaming()`` and ``to_payload()`` can be posted either for a single JSON
document (:func:`post_json`) or for an SSE chunk stream (:func:`post_stream`).

Mode checks
-----------
The request's ``stream`` flag must agree with the chosen path. A mismatch
raises ``NON_STREAMING_VIOLATION`` / ``STREAMING_VIOLATION`` before any
network access.

Logging
-------
``chat.start`` / ``chat.end`` / ``chat.error`` for single-shot calls and
``stream.start`` / ``stream.error`` for the connect phase of streams; the
stream itself logs ``stream.end`` when it terminates. Credentials never appear
in log payloads.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Protocol, Type, TypeVar, runtime_checkable

from .errors import ClientError, ErrorKind
from .http.transport import Transport
from .logging import LogContext, get_logger, log_event, normalized_log_event
from .streaming import ChunkErrorPolicy, CompletionStream, StreamState

T = TypeVar("T")

_logger = get_logger("oapi_chat.post")


@runtime_checkable
class SupportsPost(Protocol):
    """Request side of the execution contract."""

    def is_streaming(self) -> bool:
        ...

    def to_payload(self) -> Dict[str, Any]:
        ...


def _usage_tokens(result: Any) -> Optional[Dict[str, int]]:
    usage = getattr(result, "usage", None)
    if usage is None:
        return None
    return usage.as_tokens()


def post_json(
    transport: Transport,
    url: str,
    api_key: str,
    request: SupportsPost,
    response_model: Type[T],
    *,
    ctx: Optional[LogContext] = None,
    logger: Optional[logging.Logger] = None,
) -> T:
    """POST ``request`` and decode the JSON reply into ``response_model``.

    One HTTP exchange, no retries.

    Raises:
        ClientError: ``NON_STREAMING_VIOLATION`` (no network call) when the
            request asks for streaming; ``SEND`` / ``RESPONSE`` /
            ``RESPONSE_STATUS`` from the transport; ``DESERIALIZATION`` when
            the body does not match ``response_model``.
    """
    if request.is_streaming():
        raise ClientError(ErrorKind.NON_STREAMING_VIOLATION)
    log = logger or _logger
    ctx = ctx or LogContext(endpoint=url)
    log_event(log, "chat.start", ctx)
    start = time.perf_counter()
    try:
        raw = transport.send(url, api_key, request.to_payload(), streaming=False)
        result = response_model.parse(raw.text or "")  # type: ignore[attr-defined]
    except ClientError as err:
        normalized_log_event(
            log,
            "chat.error",
            ctx,
            phase="finalize",
            error_kind=err.kind.value,
            emitted=False,
            tokens=None,
            level=logging.WARNING,
            status_code=err.status_code,
            latency_ms=(time.perf_counter() - start) * 1000.0,
            error=err.message,
        )
        raise
    ctx.response_id = getattr(result, "id", None)
    normalized_log_event(
        log,
        "chat.end",
        ctx,
        phase="finalize",
        emitted=True,
        tokens=_usage_tokens(result),
        latency_ms=(time.perf_counter() - start) * 1000.0,
    )
    return result


def post_stream(
    transport: Transport,
    url: str,
    api_key: str,
    request: SupportsPost,
    chunk_model: Type[T],
    *,
    policy: ChunkErrorPolicy = ChunkErrorPolicy.RAISE,
    ctx: Optional[LogContext] = None,
    logger: Optional[logging.Logger] = None,
) -> CompletionStream[T]:
    """POST ``request`` and return a lazy stream of ``chunk_model`` items.

    Connection and status failures are raised here, once; no stream object is
    produced for them.

    Raises:
        ClientError: ``STREAMING_VIOLATION`` (no network call) when the
            request is not a streaming request; ``SEND`` /
            ``RESPONSE_STATUS`` from the transport.
    """
    if not request.is_streaming():
        raise ClientError(ErrorKind.STREAMING_VIOLATION)
    log = logger or get_logger("oapi_chat.stream")
    ctx = ctx or LogContext(endpoint=url)
    log_event(log, "stream.start", ctx, state=StreamState.CONNECTING.value, policy=ChunkErrorPolicy(policy).value)
    try:
        raw = transport.send(url, api_key, request.to_payload(), streaming=True)
        return CompletionStream(raw, chunk_model, policy=policy, ctx=ctx, logger=log)
    except ClientError as err:
        normalized_log_event(
            log,
            "stream.error",
            ctx,
            phase="connect",
            state=StreamState.FAILED.value,
            error_kind=err.kind.value,
            emitted=False,
            tokens=None,
            level=logging.WARNING,
            status_code=err.status_code,
            error=err.message,
        )
        raise


__all__ = ["SupportsPost", "post_json", "post_stream"]

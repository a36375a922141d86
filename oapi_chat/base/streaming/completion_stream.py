"""Pull-based stream of typed completion chunks over an SSE response.

Purpose
-------
``CompletionStream`` owns an open streaming :class:`RawResponse` and turns its
byte iterator into deserialized chunks, one SSE event per ``next()`` call.

Termination
-----------
- ``data: [DONE]`` moves the stream to ``DONE`` without yielding anything.
- A byte stream that ends without the sentinel also ends in ``DONE``; the
  terminal log event records ``sentinel=False``.
- A transport failure while reading moves to ``FAILED`` with a ``STREAM``
  error; undecodable framing moves to ``FAILED`` with ``SSE_PARSE``.
- Events with an empty ``data`` payload are keep-alives and are skipped.

Per-item failures (one event that is not a valid chunk) follow
:class:`ChunkErrorPolicy` when iterating directly; :meth:`events` reports them
in-band instead.

The connection is released on every terminal transition, on :meth:`close`,
on context-manager exit and when an abandoned stream is garbage collected.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Generic, Iterator, Optional, Type, TypeVar

import httpx

from ...config.defaults import SSE_DONE_SENTINEL
from ..errors import ClientError, ErrorKind, wrap_exception
from ..http.sse import iter_sse_events
from ..http.transport import RawResponse
from ..logging import LogContext, get_logger, log_event
from .stream_event import StreamEvent
from .stream_state import ChunkErrorPolicy, StreamState
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage

ChunkT = TypeVar("ChunkT")


class CompletionStream(Generic[ChunkT]):
    """Iterator and context manager over decoded stream chunks.

    Parameters:
        response: Open streaming response (status already validated).
        chunk_model: Class exposing ``parse(text)`` for one event payload.
        policy: Per-item error policy used by plain iteration.
        ctx: Log context shared with the call that opened the stream.
        logger: Optional logger; defaults to ``oapi_chat.stream``.
    """

    def __init__(
        self,
        response: RawResponse,
        chunk_model: Type[Any],
        *,
        policy: ChunkErrorPolicy = ChunkErrorPolicy.RAISE,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if response.stream is None:
            response.close()
            raise ClientError(ErrorKind.RESPONSE, "streaming response carries no body")
        self._response = response
        self._chunk_model = chunk_model
        self._policy = ChunkErrorPolicy(policy)
        self._ctx = ctx or LogContext()
        self._logger = logger or get_logger("oapi_chat.stream")
        self._events = iter_sse_events(response.stream)
        self._state = StreamState.STREAMING
        self._error: Optional[ClientError] = None
        self._sentinel: Optional[bool] = None
        self._metrics = StreamMetrics()
        self._start = time.perf_counter()

    # Iteration -----------------------------------------------------------
    def __iter__(self) -> Iterator[ChunkT]:
        return self

    def __next__(self) -> ChunkT:
        while True:
            evt = self._advance()
            if evt is None:
                raise StopIteration
            if evt.chunk is not None:
                return evt.chunk
            err = evt.error
            assert err is not None  # nosec B101
            if evt.fatal:
                raise err
            self._log_chunk_error(err)
            if self._policy is ChunkErrorPolicy.SKIP:
                continue
            self._fail(err)
            raise err

    def events(self) -> Iterator[StreamEvent]:
        """Yield every item in-band, including per-item errors.

        Deserialization failures are reported as non-fatal events and the
        stream keeps going. A stream-level failure is yielded once as a fatal
        event and ends the iteration.
        """
        while True:
            evt = self._advance()
            if evt is None:
                return
            if evt.error is not None and not evt.fatal:
                self._log_chunk_error(evt.error)
            yield evt

    def _advance(self) -> Optional[StreamEvent]:
        """Read events until one yields a chunk or an error; ``None`` when over."""
        while self._state is StreamState.STREAMING:
            try:
                sse = next(self._events)
            except StopIteration:
                self._finish(sentinel=False)
                return None
            except ClientError as err:
                self._fail(err)
                return StreamEvent(error=err, fatal=True)
            except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
                err = wrap_exception(exc, streaming=True)
                self._fail(err)
                return StreamEvent(error=err, fatal=True)
            except Exception as exc:  # noqa: BLE001 - any other decoder failure ends the stream
                err = ClientError(ErrorKind.SSE_PARSE, f"Failed to decode event stream: {exc!r}", raw=exc)
                self._fail(err)
                return StreamEvent(error=err, fatal=True)

            data = sse.data.strip()
            if not data:
                continue
            if data == SSE_DONE_SENTINEL:
                self._finish(sentinel=True)
                return None
            try:
                chunk = self._chunk_model.parse(data)
            except ClientError as err:
                self._metrics.errors += 1
                return StreamEvent(error=err)
            self._record(chunk)
            return StreamEvent(chunk=chunk)
        return None

    # Bookkeeping ---------------------------------------------------------
    def _record(self, chunk: Any) -> None:
        m = self._metrics
        m.emitted += 1
        if m.time_to_first_chunk_ms is None:
            m.time_to_first_chunk_ms = (time.perf_counter() - self._start) * 1000.0
            self._ctx.response_id = getattr(chunk, "id", None)
        usage = getattr(chunk, "usage", None)
        if usage is not None:
            apply_token_usage(
                m,
                prompt=usage.prompt_tokens,
                completion=usage.completion_tokens,
                total=usage.total_tokens,
            )

    def _log_chunk_error(self, err: ClientError) -> None:
        log_event(
            self._logger,
            "stream.chunk.error",
            self._ctx,
            level=logging.WARNING,
            error_kind=err.kind.value,
            error=err.message,
            emitted_count=self._metrics.emitted,
            policy=self._policy.value,
        )

    def _finish(self, *, sentinel: bool, cancelled: bool = False) -> None:
        self._state = StreamState.DONE
        self._sentinel = sentinel
        self._release()
        finalize_stream(
            logger=self._logger,
            ctx=self._ctx,
            metrics=self._metrics,
            sentinel=sentinel,
            cancelled=cancelled,
        )

    def _fail(self, err: ClientError) -> None:
        self._state = StreamState.FAILED
        self._error = err
        self._release()
        finalize_stream(logger=self._logger, ctx=self._ctx, metrics=self._metrics, error=err)

    def _release(self) -> None:
        self._metrics.total_duration_ms = (time.perf_counter() - self._start) * 1000.0
        self._response.close()

    # API -----------------------------------------------------------------
    def close(self) -> None:
        """Release the connection. Safe to call repeatedly or after completion."""
        if self._state is StreamState.STREAMING:
            self._finish(sentinel=False, cancelled=True)
        else:
            self._response.close()

    def __enter__(self) -> "CompletionStream[ChunkT]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        response = self.__dict__.get("_response")
        if response is not None:
            response.close()

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether the stream has reached a terminal state."""
        return self._state.terminal

    @property
    def error(self) -> Optional[ClientError]:  # noqa: D401 - short property
        """Return the error that failed the stream, if any."""
        return self._error

    @property
    def sentinel_seen(self) -> Optional[bool]:
        """True if ``[DONE]`` ended the stream; ``None`` while streaming."""
        return self._sentinel

    @property
    def metrics(self) -> StreamMetrics:
        return self._metrics

    @property
    def context(self) -> LogContext:
        return self._ctx


__all__ = ["CompletionStream"]

"""Server-Sent Events decoding over a byte iterator.

Lines end with ``\\r\\n``, ``\\n`` or ``\\r``, including terminators split
across network chunks. An event is a group of lines closed by a blank line:

- ``data:`` values are joined with ``\\n``;
- ``event:``, ``id:`` and ``retry:`` fields are recorded;
- lines starting with ``:`` are comments and ignored;
- one space after the colon is stripped; unknown fields are ignored.

Groups without any ``data`` line are not dispatched. A trailing event that
the server did not close with a blank line is dispatched at end of stream.

Bytes that are not valid UTF-8 raise ``ClientError(SSE_PARSE)``. Lines are
therefore split on raw bytes and decoded one by one; ``httpx.Response.iter_lines``
decodes with replacement characters and would hide such bytes. Decoding is
lazy: nothing is read from the underlying iterator until the next event is
requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from ..errors import ClientError, ErrorKind

_BOM = "\ufeff"


@dataclass(frozen=True)
class SseEvent:
    """One dispatched server-sent event."""

    data: str
    event: str = "message"
    id: Optional[str] = None
    retry: Optional[int] = None


def _split_lines(chunks: Iterable[bytes]) -> Iterator[bytes]:
    """Yield raw lines (without terminators) from a chunked byte stream.

    Terminator positions are cached and only searched again once the scan has
    moved past them, so each chunk is scanned in linear time.
    """
    buf = b""
    for chunk in chunks:
        if not chunk:
            continue
        buf += chunk
        start = 0
        n = len(buf)
        cr = buf.find(b"\r")
        lf = buf.find(b"\n")
        while start < n:
            if cr != -1 and cr < start:
                cr = buf.find(b"\r", start)
            if lf != -1 and lf < start:
                lf = buf.find(b"\n", start)
            if cr == -1 and lf == -1:
                break
            if lf != -1 and (cr == -1 or lf < cr):
                yield buf[start:lf]
                start = lf + 1
                continue
            # a lone \r at the end of the buffer may be the first half of \r\n
            if cr == n - 1:
                break
            yield buf[start:cr]
            start = cr + 2 if buf[cr + 1:cr + 2] == b"\n" else cr + 1
        buf = buf[start:]
    if buf.endswith(b"\r"):
        buf = buf[:-1]
        yield buf
    elif buf:
        yield buf


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ClientError(ErrorKind.SSE_PARSE, f"Failed to parse to String: {exc}", raw=exc) from exc


class SseDecoder:
    """Accumulate decoded lines into :class:`SseEvent` objects."""

    def __init__(self) -> None:
        self._data: List[str] = []
        self._event = ""
        self._last_id: Optional[str] = None
        self._retry: Optional[int] = None

    @property
    def last_event_id(self) -> Optional[str]:
        return self._last_id

    def feed_line(self, line: str) -> Optional[SseEvent]:
        """Process one line; return an event when a blank line closes one."""
        if not line:
            return self.flush()
        if line.startswith(":"):
            return None
        field, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if field == "data":
            self._data.append(value)
        elif field == "event":
            self._event = value
        elif field == "id":
            if "\x00" not in value:
                self._last_id = value
        elif field == "retry":
            if value.isascii() and value.isdigit():
                self._retry = int(value)
        return None

    def flush(self) -> Optional[SseEvent]:
        """Dispatch the pending event, if it carries data."""
        if not self._data:
            self._event = ""
            return None
        evt = SseEvent(
            data="\n".join(self._data),
            event=self._event or "message",
            id=self._last_id,
            retry=self._retry,
        )
        self._data = []
        self._event = ""
        return evt


def iter_sse_events(chunks: Iterable[bytes]) -> Iterator[SseEvent]:
    """Decode a byte iterator into server-sent events in wire order."""
    decoder = SseDecoder()
    first = True
    for raw in _split_lines(chunks):
        line = _decode(raw)
        if first:
            first = False
            if line.startswith(_BOM):
                line = line[1:]
        evt = decoder.feed_line(line)
        if evt is not None:
            yield evt
    tail = decoder.flush()
    if tail is not None:
        yield tail


__all__ = ["SseEvent", "SseDecoder", "iter_sse_events"]

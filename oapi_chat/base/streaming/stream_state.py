"""Lifecycle state and per-item error policy for completion streams."""

from __future__ import annotations

from enum import Enum


class StreamState(str, Enum):
    """Lifecycle of one streaming call.

    ``CONNECTING`` covers the request and status check inside ``post_stream``
    and is reported on its ``stream.start`` event; a stream object only exists
    from ``STREAMING`` on. ``DONE`` and ``FAILED`` are terminal and imply the
    connection has been released; ``stream.end`` and ``stream.error`` report
    them.
    """

    CONNECTING = "connecting"
    STREAMING = "streaming"
    DONE = "done"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (StreamState.DONE, StreamState.FAILED)


class ChunkErrorPolicy(str, Enum):
    """What iterating a stream does when one event fails to deserialize.

    RAISE: raise the error, move to ``FAILED`` and release the connection.
    SKIP: log ``stream.chunk.error`` and continue with the next event.
    """

    RAISE = "raise"
    SKIP = "skip"


__all__ = ["StreamState", "ChunkErrorPolicy"]

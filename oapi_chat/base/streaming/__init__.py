"""Streaming package: completion stream state machine, metrics and accumulation."""

from .accumulate import accumulate_chunks
from .completion_stream import CompletionStream
from .stream_event import StreamEvent
from .stream_state import ChunkErrorPolicy, StreamState
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage, build_token_usage

__all__ = [
    "accumulate_chunks",
    "CompletionStream",
    "StreamEvent",
    "ChunkErrorPolicy",
    "StreamState",
    "finalize_stream",
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
]

"""Streaming metrics data structures.

Isolated within the streaming package to keep the stream state machine small.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single stream.

    Fields:
      emitted: chunks handed to the consumer
      errors: per-item deserialization failures (skipped or reported in-band)
      time_to_first_chunk_ms: delay between stream start and the first chunk
      total_duration_ms: set when the stream reaches a terminal state
      prompt_tokens / completion_tokens / total_tokens: last usage seen
      tokens: canonical ``{prompt, completion, total}`` mapping
    """

    emitted: int = 0
    errors: int = 0
    time_to_first_chunk_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    tokens: Optional[Dict[str, Optional[int]]] = None


def build_token_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping."""
    derived_total = total
    if derived_total is None and (prompt is not None and completion is not None):
        derived_total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": derived_total}


def apply_token_usage(metrics: StreamMetrics, *, prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> None:
    """Populate token usage fields on a :class:`StreamMetrics` instance."""
    metrics.tokens = build_token_usage(prompt, completion, total)
    metrics.prompt_tokens = prompt
    metrics.completion_tokens = completion
    metrics.total_tokens = metrics.tokens["total"]


__all__ = [
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
]

"""Finalize stream helper.

Located within the streaming package to localize the consolidated
``stream.end`` / ``stream.error`` log event.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import ClientError
from ..logging import LogContext, normalized_log_event
from .stream_state import StreamState
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: Optional[LogContext],
    metrics: StreamMetrics,
    error: Optional[ClientError] = None,
    sentinel: Optional[bool] = None,
    cancelled: bool = False,
) -> None:
    """Emit the terminal event of a stream with its metrics."""
    normalized_log_event(
        logger,
        "stream.end" if error is None else "stream.error",
        ctx,
        phase="finalize",
        error_kind=error.kind.value if error is not None else None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        level=logging.INFO if error is None else logging.WARNING,
        state=(StreamState.DONE if error is None else StreamState.FAILED).value,
        emitted_count=metrics.emitted,
        chunk_errors=metrics.errors,
        time_to_first_chunk_ms=metrics.time_to_first_chunk_ms,
        total_duration_ms=metrics.total_duration_ms,
        sentinel=sentinel,
        cancelled=cancelled or None,
        error=error.message if error is not None else None,
    )


__all__ = ["finalize_stream"]

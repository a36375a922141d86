"""In-band stream item carrying either a chunk or an error."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..errors import ClientError


@dataclass
class StreamEvent:
    """One item of ``CompletionStream.events()``.

    Fields:
      chunk: decoded chunk (``None`` for error items)
      error: per-item or stream-level error
      fatal: True for the final item of a stream that failed mid-way
    """

    chunk: Optional[Any] = None
    error: Optional[ClientError] = None
    fatal: bool = False

    def is_error(self) -> bool:
        return self.error is not None


__all__ = ["StreamEvent"]

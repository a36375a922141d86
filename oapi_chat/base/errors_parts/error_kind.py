"""
Normalized client error kinds (taxonomy).

Defines the `ErrorKind` enumeration used by the transport, the response paths
and the schema layer. Values are lowercase snake_case and are considered a
stable public contract for logging and caller-side branching.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated failure categories for a single client call."""

    SEND = "send"
    RESPONSE = "response"
    RESPONSE_STATUS = "response_status"
    SSE_PARSE = "sse_parse"
    STREAM = "stream"
    DESERIALIZATION = "deserialization"
    NON_STREAMING_VIOLATION = "non_streaming_violation"
    STREAMING_VIOLATION = "streaming_violation"
    FILE_NOT_FOUND = "file_not_found"
    FILE_READ = "file_read"

    @property
    def is_mode_violation(self) -> bool:
        """Whether the kind is a local, pre-network contract failure."""
        return self in (ErrorKind.NON_STREAMING_VIOLATION, ErrorKind.STREAMING_VIOLATION)


__all__ = ["ErrorKind"]

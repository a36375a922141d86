"""
Structured client error exception type.

Wraps transport, protocol and deserialization failures with a normalized
`ErrorKind` so every public operation reports one exception type.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_kind import ErrorKind


_DEFAULT_MESSAGES = {
    ErrorKind.NON_STREAMING_VIOLATION: "You cannot post a streaming request in a non-streaming context",
    ErrorKind.STREAMING_VIOLATION: "You cannot post a non-streaming request in a streaming context",
}


@dataclass
class ClientError(Exception):
    """Represents a structured client error with a normalized error kind.

    Attributes:
        kind: Normalized :class:`ErrorKind` classification for the failure.
        message: Human-readable error message suitable for logging. For
            ``DESERIALIZATION`` this is the underlying parser message.
        status_code: HTTP status for ``RESPONSE_STATUS`` errors; ``None`` otherwise.
        raw: Optional original exception for diagnostics.
    """

    kind: ErrorKind
    message: str = ""
    status_code: Optional[int] = None
    raw: Optional[BaseException] = None

    def __post_init__(self) -> None:
        if not self.message:
            self.message = _DEFAULT_MESSAGES.get(self.kind, self.kind.value)
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining kind, status and message."""
        if self.status_code is not None:
            return f"{self.kind.value}[{self.status_code}]: {self.message}"
        return f"{self.kind.value}: {self.message}"

    @classmethod
    def status(cls, status_code: int) -> "ClientError":
        """Build a ``RESPONSE_STATUS`` error for a non-2xx HTTP status."""
        return cls(
            ErrorKind.RESPONSE_STATUS,
            f"Invalid response status: {status_code}",
            status_code=status_code,
        )

    @classmethod
    def deserialization(cls, message: str, raw: Optional[BaseException] = None) -> "ClientError":
        """Build a ``DESERIALIZATION`` error carrying the parser message."""
        return cls(ErrorKind.DESERIALIZATION, message, raw=raw)


__all__ = ["ClientError"]

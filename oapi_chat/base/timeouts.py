"""HTTP timeout configuration for the transport layer.

The library does not enforce deadlines of its own: by default every timeout is
``None`` and callers wrap calls with their own deadline. Deployments that want
the HTTP client to give up on stalled sockets set, in seconds:

    OAPI_HTTP_TIMEOUT_SECONDS     read/write/pool timeout
    OAPI_CONNECT_TIMEOUT_SECONDS  connect timeout (defaults to the above)

Non-numeric or non-positive values are ignored.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values in seconds; ``None`` disables a timeout."""

    http_timeout_seconds: Optional[float] = None
    connect_timeout_seconds: Optional[float] = None

    def to_httpx(self) -> httpx.Timeout:
        """Return the equivalent ``httpx.Timeout``."""
        connect = self.connect_timeout_seconds
        if connect is None:
            connect = self.http_timeout_seconds
        return httpx.Timeout(self.http_timeout_seconds, connect=connect)


def _parse_env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        val = float(raw)
    except ValueError:
        return None
    return val if val > 0 else None


def get_timeout_config() -> TimeoutConfig:
    """Return the timeout configuration derived from the environment."""
    return TimeoutConfig(
        http_timeout_seconds=_parse_env_float("OAPI_HTTP_TIMEOUT_SECONDS"),
        connect_timeout_seconds=_parse_env_float("OAPI_CONNECT_TIMEOUT_SECONDS"),
    )


__all__ = ["TimeoutConfig", "get_timeout_config"]

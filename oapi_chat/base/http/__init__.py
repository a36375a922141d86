"""HTTP utilities package.

Exposes pooled httpx clients, the transport contract and the SSE decoder.
"""

from .client import get_httpx_client, close_all_clients
from .sse import SseDecoder, SseEvent, iter_sse_events
from .transport import HttpxTransport, RawResponse, Transport, build_headers, is_success

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "SseDecoder",
    "SseEvent",
    "iter_sse_events",
    "HttpxTransport",
    "RawResponse",
    "Transport",
    "build_headers",
    "is_success",
]

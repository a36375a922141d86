"""HTTP transport contract and the default ``httpx`` implementation.

Purpose:
    Isolate the single network exchange behind a small protocol so the request
    execution code (``base.post``) and the stream state machine can be tested
    with in-memory fakes.

Contract:
    ``send`` POSTs a JSON body with ``Authorization: Bearer <key>``,
    ``Content-Type: application/json`` and ``Accept`` set to
    ``application/json`` or ``text/event-stream``. ``send_multipart`` POSTs a
    ``multipart/form-data`` body. Both return a :class:`RawResponse` for 2xx
    statuses only.

Failure Modes:
    - Connect/send failure -> ``ClientError(SEND)``.
    - Body read failure (non-streaming) -> ``ClientError(RESPONSE)``.
    - Non-2xx status -> ``ClientError(RESPONSE_STATUS)`` carrying the numeric
      status; the body is not interpreted and a streaming connection is closed
      before raising.

No retries are performed and no timeout is enforced beyond what
``base.timeouts`` configures on pooled clients.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Protocol, Tuple, runtime_checkable

import httpx

from ..errors import ClientError, ErrorKind, wrap_exception
from .client import get_httpx_client

JSON_MIME = "application/json"
EVENT_STREAM_MIME = "text/event-stream"

# (filename, content, content_type) as accepted by httpx ``files=``.
FilePart = Tuple[str, bytes, str]


class RawResponse:
    """Status, headers and body of a successful HTTP exchange.

    Exactly one of ``text`` (non-streaming) or ``stream`` (open byte
    iterator) is set. ``close`` releases the connection and is idempotent.
    """

    def __init__(
        self,
        status: int,
        headers: Optional[Mapping[str, str]] = None,
        *,
        text: Optional[str] = None,
        stream: Optional[Iterator[bytes]] = None,
        closer: Optional[Callable[[], None]] = None,
    ) -> None:
        self.status = status
        self.headers: Dict[str, str] = dict(headers or {})
        self.text = text
        self.stream = stream
        self._closer = closer
        self._closed = False

    @property
    def is_streaming(self) -> bool:
        return self.stream is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._closer is not None:
            self._closer()

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        kind = "stream" if self.is_streaming else "text"
        return f"RawResponse(status={self.status}, body={kind}, closed={self._closed})"


@runtime_checkable
class Transport(Protocol):
    """Issue one HTTP exchange and return the raw response."""

    def send(
        self,
        url: str,
        api_key: str,
        body: Mapping[str, Any],
        *,
        streaming: bool = False,
    ) -> RawResponse:
        ...

    def send_multipart(
        self,
        url: str,
        api_key: str,
        data: Mapping[str, str],
        files: Mapping[str, FilePart],
    ) -> RawResponse:
        ...


def build_headers(api_key: str, *, streaming: bool = False, json_body: bool = True) -> Dict[str, str]:
    """Return the request headers for a call.

    ``Content-Type`` is omitted for multipart bodies so ``httpx`` can add the
    boundary parameter itself.
    """
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Accept": EVENT_STREAM_MIME if streaming else JSON_MIME,
    }
    if json_body:
        headers["Content-Type"] = JSON_MIME
    return headers


def is_success(status: int) -> bool:
    return 200 <= status < 300


class HttpxTransport:
    """:class:`Transport` backed by a pooled (or injected) ``httpx.Client``.

    Parameters:
        client: Optional explicit client, e.g. one built on
            ``httpx.MockTransport`` in tests. When omitted a pooled client is
            fetched per call from :func:`get_httpx_client`.
        purpose: Pool discriminator used with the pooled client.
    """

    def __init__(self, client: Optional[httpx.Client] = None, *, purpose: str = "chat") -> None:
        self._client = client
        self._purpose = purpose

    @property
    def client(self) -> httpx.Client:
        if self._client is not None:
            return self._client
        return get_httpx_client(None, self._purpose)

    def send(
        self,
        url: str,
        api_key: str,
        body: Mapping[str, Any],
        *,
        streaming: bool = False,
    ) -> RawResponse:
        client = self.client
        request = client.build_request(
            "POST",
            url,
            json=dict(body),
            headers=build_headers(api_key, streaming=streaming),
        )
        response = self._open(client, request)
        if streaming:
            return RawResponse(
                response.status_code,
                response.headers,
                stream=response.iter_bytes(),
                closer=response.close,
            )
        return self._read(response)

    def send_multipart(
        self,
        url: str,
        api_key: str,
        data: Mapping[str, str],
        files: Mapping[str, FilePart],
    ) -> RawResponse:
        client = self.client
        request = client.build_request(
            "POST",
            url,
            data=dict(data),
            files=dict(files),
            headers=build_headers(api_key, json_body=False),
        )
        return self._read(self._open(client, request))

    @staticmethod
    def _open(client: httpx.Client, request: httpx.Request) -> httpx.Response:
        try:
            response = client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise wrap_exception(exc) from exc
        if not is_success(response.status_code):
            response.close()
            raise ClientError.status(response.status_code)
        return response

    @staticmethod
    def _read(response: httpx.Response) -> RawResponse:
        try:
            response.read()
            text = response.text
        except (httpx.HTTPError, httpx.StreamError, UnicodeDecodeError) as exc:
            raise ClientError(ErrorKind.RESPONSE, f"Failed to get response text: {exc!r}", raw=exc) from exc
        finally:
            response.close()
        return RawResponse(response.status_code, response.headers, text=text)


__all__ = [
    "JSON_MIME",
    "EVENT_STREAM_MIME",
    "FilePart",
    "RawResponse",
    "Transport",
    "HttpxTransport",
    "build_headers",
    "is_success",
]

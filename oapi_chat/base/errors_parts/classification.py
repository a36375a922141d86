"""
Error classification helpers mapping exceptions to :class:`ClientError`.

Transport and parser libraries raise their own exception types; the helpers
here fold them into the client taxonomy so callers handle a single type. HTTP
status labelling is provided for callers only; the transport itself never
classifies 4xx against 5xx.
"""
from __future__ import annotations

import json
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from .client_error import ClientError
from .error_kind import ErrorKind


_HTTP_STATUS_LABELS: Dict[int, str] = {
    400: "bad_request",
    401: "auth",
    402: "insufficient_balance",
    403: "auth",
    404: "not_found",
    408: "timeout",
    409: "conflict",
    422: "validation",
    429: "rate_limit",
    500: "server_error",
    502: "bad_gateway",
    503: "unavailable",
    504: "timeout",
}


def describe_status(status_code: int) -> str:
    """Return an informational label for an HTTP status code.

    Unknown codes fall back to ``client_error`` / ``server_error`` /
    ``unexpected`` by range. The label is advisory; nothing in the library
    branches on it.
    """
    label = _HTTP_STATUS_LABELS.get(status_code)
    if label is not None:
        return label
    if 400 <= status_code < 500:
        return "client_error"
    if 500 <= status_code < 600:
        return "server_error"
    return "unexpected"


def _first_line(text: str) -> str:
    return text.strip().splitlines()[0] if text.strip() else text


def wrap_exception(exc: BaseException, *, streaming: bool = False) -> ClientError:
    """Classify an exception into a :class:`ClientError`.

    Precedence:
        1. ClientError passthrough.
        2. ``httpx.HTTPStatusError`` -> ``RESPONSE_STATUS``.
        3. Other ``httpx`` errors (and any ``OSError`` while a stream is being
           read) -> ``STREAM`` when streaming, ``SEND`` otherwise.
        4. JSON / pydantic validation errors -> ``DESERIALIZATION``.
        5. ``UnicodeDecodeError`` -> ``SSE_PARSE``.
        6. ``FileNotFoundError`` / ``OSError`` -> ``FILE_NOT_FOUND`` / ``FILE_READ``.
        7. Anything else -> ``SEND`` (or ``STREAM`` when streaming).
    """
    if isinstance(exc, ClientError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        err = ClientError.status(exc.response.status_code)
        err.raw = exc
        return err
    if isinstance(exc, (httpx.HTTPError, httpx.StreamError)) or (streaming and isinstance(exc, OSError)):
        kind = ErrorKind.STREAM if streaming else ErrorKind.SEND
        return ClientError(kind, f"{exc.__class__.__name__}: {exc}", raw=exc)
    if isinstance(exc, json.JSONDecodeError):
        return ClientError.deserialization(str(exc), raw=exc)
    if isinstance(exc, ValidationError):
        return ClientError.deserialization(str(exc), raw=exc)
    if isinstance(exc, UnicodeDecodeError):
        return ClientError(ErrorKind.SSE_PARSE, f"Failed to parse to String: {exc}", raw=exc)
    if isinstance(exc, FileNotFoundError):
        return ClientError(ErrorKind.FILE_NOT_FOUND, f"File not found at: {exc.filename}", raw=exc)
    if isinstance(exc, OSError):
        return ClientError(ErrorKind.FILE_READ, f"Failed to read file: {exc}", raw=exc)
    kind = ErrorKind.STREAM if streaming else ErrorKind.SEND
    return ClientError(kind, _first_line(str(exc)) or exc.__class__.__name__, raw=exc)


def status_of(exc: BaseException) -> Optional[int]:
    """Return the HTTP status carried by an exception, if any."""
    if isinstance(exc, ClientError):
        return exc.status_code
    response = getattr(exc, "response", None)
    code = getattr(response, "status_code", None)
    if isinstance(code, int) and 100 <= code < 600:
        return code
    return None


__all__ = [
    "describe_status",
    "wrap_exception",
    "status_of",
]

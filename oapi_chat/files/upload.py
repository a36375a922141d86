"""Multipart upload execution.

Mirrors ``base.post.post_json`` for ``multipart/form-data`` bodies: one HTTP
exchange, the reply decoded into :class:`FileObject`, structured
``file.upload.start`` / ``file.upload.end`` events around it.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from ..base.errors import ClientError
from ..base.http.transport import Transport
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from .request import CreateFileRequest
from .response import FileObject

_logger = get_logger("oapi_chat.files")


def upload_file(
    transport: Transport,
    url: str,
    api_key: str,
    request: CreateFileRequest,
    *,
    ctx: Optional[LogContext] = None,
    logger: Optional[logging.Logger] = None,
) -> FileObject:
    """Upload ``request.file`` and return the created :class:`FileObject`.

    Raises:
        ClientError: ``FILE_NOT_FOUND`` / ``FILE_READ`` before any network
            call when the file cannot be read; transport and
            ``DESERIALIZATION`` errors otherwise.
    """
    log = logger or _logger
    ctx = ctx or LogContext(endpoint=url)
    start = time.perf_counter()
    try:
        name, part = request.file_part()
        log_event(
            log,
            "file.upload.start",
            ctx,
            filename=part[0],
            size_bytes=len(part[1]),
            purpose=request.purpose_value,
        )
        raw = transport.send_multipart(url, api_key, request.form_fields(), {name: part})
        result = FileObject.parse(raw.text or "")
    except ClientError as err:
        normalized_log_event(
            log,
            "file.upload.end",
            ctx,
            phase="finalize",
            error_kind=err.kind.value,
            emitted=False,
            tokens=None,
            level=logging.WARNING,
            status_code=err.status_code,
            error=err.message,
        )
        raise
    normalized_log_event(
        log,
        "file.upload.end",
        ctx,
        phase="finalize",
        emitted=True,
        tokens=None,
        file_id=result.id,
        latency_ms=(time.perf_counter() - start) * 1000.0,
    )
    return result


__all__ = ["upload_file"]

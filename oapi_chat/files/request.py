"""File upload request (``POST /files``, multipart/form-data).

The file is read from disk only when the multipart body is built, so a
missing or unreadable path surfaces as ``FILE_NOT_FOUND`` / ``FILE_READ`` at
call time rather than at construction.
"""

from __future__ import annotations

import json
import mimetypes
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple, Union

from pydantic import Field

from ..base.errors import ClientError, ErrorKind
from ..base.http.transport import FilePart
from ..chat.wire import WireModel

MIN_EXPIRY_SECONDS = 3600
MAX_EXPIRY_SECONDS = 2592000


class FilePurpose(str, Enum):
    """Standard purposes; vendors accept additional strings (Qwen ``file-extract``)."""

    ASSISTANTS = "assistants"
    BATCH = "batch"
    FINE_TUNE = "fine-tune"
    VISION = "vision"
    USER_DATA = "user_data"
    EVALS = "evals"


class ExpiresAfter(WireModel):
    """Expiration policy anchored at upload time (1 hour to 30 days)."""

    anchor: Literal["created_at"] = "created_at"
    seconds: int = Field(ge=MIN_EXPIRY_SECONDS, le=MAX_EXPIRY_SECONDS)


class CreateFileRequest(WireModel):
    """Parameters of a file upload.

    Attributes:
        file: Local path of the file to upload.
        purpose: A :class:`FilePurpose` or a vendor-specific string.
        expires_after: Optional expiration policy, sent as a JSON form field.
        extra_body: Additional form fields; non-string values are JSON-encoded.
    """

    file: Path
    purpose: Union[FilePurpose, str] = Field(union_mode="left_to_right")
    expires_after: Optional[ExpiresAfter] = None
    extra_body: Optional[Dict[str, Any]] = None

    @property
    def purpose_value(self) -> str:
        return self.purpose.value if isinstance(self.purpose, FilePurpose) else self.purpose

    def form_fields(self) -> Dict[str, str]:
        """Return the non-file multipart fields."""
        data: Dict[str, str] = {}
        for key, value in (self.extra_body or {}).items():
            if value is not None:
                data[key] = value if isinstance(value, str) else json.dumps(value)
        data["purpose"] = self.purpose_value
        if self.expires_after is not None:
            data["expires_after"] = self.expires_after.to_json()
        return data

    def file_part(self) -> Tuple[str, FilePart]:
        """Read the file and return the ``("file", (name, bytes, mime))`` part.

        Raises:
            ClientError: ``FILE_NOT_FOUND`` when the path does not exist,
                ``FILE_READ`` when it cannot be read.
        """
        path = self.file
        try:
            content = path.read_bytes()
        except FileNotFoundError as exc:
            raise ClientError(ErrorKind.FILE_NOT_FOUND, f"File not found at: {path}", raw=exc) from exc
        except OSError as exc:
            raise ClientError(ErrorKind.FILE_READ, f"Failed to read file {path}: {exc}", raw=exc) from exc
        mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return "file", (path.name, content, mime)


__all__ = [
    "MIN_EXPIRY_SECONDS",
    "MAX_EXPIRY_SECONDS",
    "FilePurpose",
    "ExpiresAfter",
    "CreateFileRequest",
]

"""Uploaded file metadata returned by ``POST /files``."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import Field

from ..chat.wire import WireModel
from .request import FilePurpose


class FileStatus(str, Enum):
    UPLOADED = "uploaded"
    PROCESSED = "processed"
    ERROR = "error"


class FileObject(WireModel):
    id: str
    bytes: int
    created_at: int
    filename: str
    object: str = "file"
    purpose: Union[FilePurpose, str] = Field(union_mode="left_to_right")
    status: Optional[FileStatus] = None
    expires_at: Optional[int] = None
    status_details: Optional[str] = None


__all__ = ["FileStatus", "FileObject"]

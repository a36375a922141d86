"""File upload request/response models and the multipart upload call."""

from .request import CreateFileRequest, ExpiresAfter, FilePurpose
from .response import FileObject, FileStatus
from .upload import upload_file

__all__ = [
    "CreateFileRequest",
    "ExpiresAfter",
    "FilePurpose",
    "FileObject",
    "FileStatus",
    "upload_file",
]

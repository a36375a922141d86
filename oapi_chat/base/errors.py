"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``oapi_chat.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_kind import ErrorKind
from .errors_parts.client_error import ClientError
from .errors_parts.classification import describe_status, status_of, wrap_exception

__all__ = ["ErrorKind", "ClientError", "describe_status", "status_of", "wrap_exception"]

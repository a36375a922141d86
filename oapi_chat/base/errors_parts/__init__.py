"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `oapi_chat.base.errors` for the stable surface.
"""

from .error_kind import ErrorKind
from .client_error import ClientError
from .classification import describe_status, status_of, wrap_exception

__all__ = ["ErrorKind", "ClientError", "describe_status", "status_of", "wrap_exception"]

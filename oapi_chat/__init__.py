"""oapi_chat package

Typed client for OpenAI-compatible chat/completions APIs (OpenAI, DeepSeek,
Qwen / DashScope compatible mode) with single-shot and SSE streaming calls.

Public API (re-exported):
    - Version: ``__version__``
    - Errors: :class:`ClientError`, :class:`ErrorKind`
    - Factory: :func:`create`
    - Clients: :class:`OpenAICompatibleClient`, :class:`DeepSeekClient`,
      :class:`QwenClient`, :class:`OpenAIClient`
    - Schema: :class:`RequestBody`, message types, :class:`ChatCompletion`,
      :class:`ChatCompletionChunk`
    - Streaming: :class:`CompletionStream`, :class:`ChunkErrorPolicy`,
      :class:`StreamEvent`, :func:`accumulate_chunks`
    - Files: :class:`CreateFileRequest`, :class:`FilePurpose`,
      :class:`FileObject`
"""

from .base.compat_client import OpenAICompatibleClient
from .base.errors import ClientError, ErrorKind, describe_status
from .base.factory import ClientFactory, UnknownVendorError, create
from .base.http.transport import HttpxTransport, RawResponse, Transport
from .base.logging import configure_logger, get_logger
from .base.post import post_json, post_stream
from .base.streaming import (
    ChunkErrorPolicy,
    CompletionStream,
    StreamEvent,
    StreamState,
    accumulate_chunks,
)
from .chat import (
    AssistantMessage,
    ChatCompletion,
    ChatCompletionChunk,
    DeveloperMessage,
    FinishReason,
    RequestBody,
    StreamOptions,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from .deepseek import DeepSeekClient
from .files import CreateFileRequest, FileObject, FilePurpose
from .openai import OpenAIClient
from .qwen import QwenClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ClientError",
    "ErrorKind",
    "describe_status",
    "create",
    "ClientFactory",
    "UnknownVendorError",
    "OpenAICompatibleClient",
    "DeepSeekClient",
    "QwenClient",
    "OpenAIClient",
    "HttpxTransport",
    "RawResponse",
    "Transport",
    "configure_logger",
    "get_logger",
    "post_json",
    "post_stream",
    "ChunkErrorPolicy",
    "CompletionStream",
    "StreamEvent",
    "StreamState",
    "accumulate_chunks",
    "AssistantMessage",
    "ChatCompletion",
    "ChatCompletionChunk",
    "DeveloperMessage",
    "FinishReason",
    "RequestBody",
    "StreamOptions",
    "SystemMessage",
    "ToolMessage",
    "UserMessage",
    "CreateFileRequest",
    "FileObject",
    "FilePurpose",
]

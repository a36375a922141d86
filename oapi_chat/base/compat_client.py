"""OpenAICompatibleClient: shared client for OpenAI-compatible vendors.

Purpose:
- One client class for every vendor speaking the chat/completions wire shape.
  Vendor subclasses only carry a name and their defaults (base URL, model).

External dependencies:
- Network I/O goes through a :class:`Transport` (``HttpxTransport`` unless one
  is injected); request execution is delegated to ``base.post`` and
  ``files.upload``.

Failure semantics:
- Every public call raises :class:`ClientError`; nothing is retried.
- A request with an empty ``model`` is sent with the client default.

Credentials:
- The API key is held on the instance and passed per call to the transport.
  It is never written to the environment nor included in log events.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Optional

from ..chat.request import RequestBody
from ..chat.response import ChatCompletion, ChatCompletionChunk
from ..config.defaults import CHAT_COMPLETIONS_PATH, FILES_PATH
from ..files.request import CreateFileRequest
from ..files.response import FileObject
from ..files.upload import upload_file
from .http.transport import HttpxTransport, Transport
from .logging import LogContext, get_logger
from .post import post_json, post_stream
from .streaming import ChunkErrorPolicy, CompletionStream

MISSING_API_KEY_ERROR = "missing API key"


class OpenAICompatibleClient:
    """Chat, streaming and file upload calls against one vendor endpoint.

    Parameters:
        api_key: Bearer token for the vendor.
        base_url: API root; endpoint paths are appended. Defaults to the
            class ``DEFAULT_BASE_URL``.
        model: Default model for requests that leave ``model`` empty.
        transport: Optional transport (tests inject fakes here).
        chunk_error_policy: Default per-item policy for streams.
    """

    vendor: ClassVar[str] = "openai-compatible"
    DEFAULT_BASE_URL: ClassVar[Optional[str]] = None
    DEFAULT_MODEL: ClassVar[str] = ""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        *,
        transport: Optional[Transport] = None,
        chunk_error_policy: ChunkErrorPolicy = ChunkErrorPolicy.RAISE,
    ) -> None:
        if not api_key:
            raise ValueError(f"{MISSING_API_KEY_ERROR} for {self.vendor}")
        resolved_url = base_url or self.DEFAULT_BASE_URL
        if not resolved_url:
            raise ValueError(f"missing base_url for {self.vendor}")
        self._api_key = api_key
        self._base_url = resolved_url.rstrip("/")
        self._model = model or self.DEFAULT_MODEL
        self._transport = transport or HttpxTransport(purpose=self.vendor)
        self._policy = ChunkErrorPolicy(chunk_error_policy)
        self._logger = get_logger(f"oapi_chat.{self.vendor}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r}, model={self._model!r})"

    # ----- Basic info -----
    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_model(self) -> str:
        return self._model

    @property
    def chat_url(self) -> str:
        return self._base_url + CHAT_COMPLETIONS_PATH

    @property
    def files_url(self) -> str:
        return self._base_url + FILES_PATH

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def with_model(self, request: RequestBody) -> RequestBody:
        """Return ``request`` with an empty model replaced by the default."""
        if request.model or not self._model:
            return request
        return request.model_copy(update={"model": self._model})

    def _ctx(self, model: Optional[str], endpoint: str) -> LogContext:
        return LogContext(vendor=self.vendor, model=model or None, endpoint=endpoint)

    # ----- Calls -----
    def complete(self, request: RequestBody) -> ChatCompletion:
        """Send a non-streaming request and return the parsed completion."""
        request = self.with_model(request)
        return post_json(
            self._transport,
            self.chat_url,
            self._api_key,
            request,
            ChatCompletion,
            ctx=self._ctx(request.model, CHAT_COMPLETIONS_PATH),
            logger=self._logger,
        )

    def stream(
        self,
        request: RequestBody,
        *,
        policy: Optional[ChunkErrorPolicy] = None,
    ) -> CompletionStream[ChatCompletionChunk]:
        """Send a streaming request and return a lazy chunk stream.

        ``policy`` overrides the client's default per-item error policy.
        """
        request = self.with_model(request)
        return post_stream(
            self._transport,
            self.chat_url,
            self._api_key,
            request,
            ChatCompletionChunk,
            policy=policy or self._policy,
            ctx=self._ctx(request.model, CHAT_COMPLETIONS_PATH),
            logger=self._logger,
        )

    def upload_file(self, request: CreateFileRequest) -> FileObject:
        """Upload a file to the vendor's ``/files`` endpoint."""
        return upload_file(
            self._transport,
            self.files_url,
            self._api_key,
            request,
            ctx=self._ctx(None, FILES_PATH),
            logger=self._logger,
        )


__all__ = ["OpenAICompatibleClient", "MISSING_API_KEY_ERROR"]

"""OpenAIClient: the reference OpenAI chat/completions endpoint."""

from __future__ import annotations

from typing import ClassVar, Optional

from ..base.compat_client import OpenAICompatibleClient
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_DEFAULT_MODEL


class OpenAIClient(OpenAICompatibleClient):
    vendor: ClassVar[str] = "openai"
    DEFAULT_BASE_URL: ClassVar[Optional[str]] = OPENAI_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = OPENAI_DEFAULT_MODEL


__all__ = ["OpenAIClient"]

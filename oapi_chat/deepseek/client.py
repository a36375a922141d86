"""DeepSeekClient: OpenAI-compatible client with DeepSeek defaults.

DeepSeek specifics handled by the shared schema rather than here:
``reasoning_content`` deltas from ``deepseek-reasoner``, chat prefix
completion (assistant message with ``prefix=True``) and the context-cache
usage counters.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from ..base.compat_client import OpenAICompatibleClient
from ..config.defaults import DEEPSEEK_DEFAULT_BASE_URL, DEEPSEEK_DEFAULT_MODEL


class DeepSeekClient(OpenAICompatibleClient):
    """DeepSeek client built on the OpenAI-compatible base class."""

    vendor: ClassVar[str] = "deepseek"
    DEFAULT_BASE_URL: ClassVar[Optional[str]] = DEEPSEEK_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = DEEPSEEK_DEFAULT_MODEL


__all__ = ["DeepSeekClient"]

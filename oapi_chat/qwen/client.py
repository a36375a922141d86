"""QwenClient: Alibaba Model Studio (DashScope compatible mode).

Thinking mode is switched per request with ``RequestBody.extra_body``
(``enable_thinking``, ``thinking_budget``); file uploads accept the
vendor purpose ``file-extract``. The international endpoint
(``dashscope-intl``) is selected through ``base_url``.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from ..base.compat_client import OpenAICompatibleClient
from ..config.defaults import QWEN_DEFAULT_BASE_URL, QWEN_DEFAULT_MODEL

QWEN_FILE_EXTRACT_PURPOSE = "file-extract"


class QwenClient(OpenAICompatibleClient):
    vendor: ClassVar[str] = "qwen"
    DEFAULT_BASE_URL: ClassVar[Optional[str]] = QWEN_DEFAULT_BASE_URL
    DEFAULT_MODEL: ClassVar[str] = QWEN_DEFAULT_MODEL


__all__ = ["QwenClient", "QWEN_FILE_EXTRACT_PURPOSE"]

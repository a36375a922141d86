"""Centralized vendor defaults.

Base URLs point at each vendor's OpenAI-compatible root; endpoint paths are
appended by the clients. Models are the cheapest general chat model of each
vendor at the time of writing and are only used when a request leaves
``model`` empty.
"""

from __future__ import annotations

CHAT_COMPLETIONS_PATH = "/chat/completions"
FILES_PATH = "/files"

DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com"
DEEPSEEK_DEFAULT_MODEL = "deepseek-chat"

QWEN_DEFAULT_BASE_URL = "https://dashscope.aliyuncs.com/compatible-mode/v1"
QWEN_DEFAULT_MODEL = "qwen-plus"

OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"

SSE_DONE_SENTINEL = "[DONE]"

__all__ = [
    "CHAT_COMPLETIONS_PATH",
    "FILES_PATH",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_MODEL",
    "QWEN_DEFAULT_BASE_URL",
    "QWEN_DEFAULT_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "SSE_DONE_SENTINEL",
]

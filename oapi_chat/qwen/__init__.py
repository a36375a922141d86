from .client import QWEN_FILE_EXTRACT_PURPOSE, QwenClient

__all__ = ["QwenClient", "QWEN_FILE_EXTRACT_PURPOSE"]

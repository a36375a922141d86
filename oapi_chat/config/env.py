"""oapi_chat.config.env
=====================

Mapping of vendor identifiers to the environment variables holding their
credentials, plus small read-only lookup helpers.

Design Notes
------------
- ``ENV_MAP`` holds the canonical variable per vendor; ``ENV_ALIASES`` lists
  accepted alternatives with the canonical name first.
- Helpers only read ``os.environ``. Resolved keys are handed to clients
  explicitly; nothing here writes process state.

Failure Modes
-------------
- Unknown vendors or unset variables yield ``None``; callers decide whether a
  missing key is fatal.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "qwen": "QWEN_API_KEY",
}

# Qwen keys are issued by Alibaba Model Studio and usually live in DASHSCOPE_API_KEY.
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "qwen": ("QWEN_API_KEY", "DASHSCOPE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a key.

    Matches 'placeholder', 'changeme', 'example' anywhere or a ``test_``
    prefix, case-insensitively.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_name(vendor: str) -> Optional[str]:
    """Return the canonical API key variable for ``vendor`` (case-insensitive)."""
    return ENV_MAP.get(vendor.lower()) if vendor else None


def get_env_var_candidates(vendor: str) -> Iterable[str]:
    """Yield accepted API key variable names for a vendor, canonical first."""
    v = (vendor or "").lower()
    canonical = ENV_MAP.get(v)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(v, ()):
        if alias != canonical:
            yield alias


def resolve_vendor_key(vendor: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a vendor from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        variable, or ``(None, None)``.
    """
    for name in get_env_var_candidates(vendor):
        val = os.environ.get(name, "").strip()
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_vendor_key",
]

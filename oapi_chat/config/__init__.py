"""Layered, read-only configuration for vendor clients.

Sources are merged in a predictable order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional config file named by ``OAPI_CONFIG_FILE`` (YAML or JSON)
    3. Environment variables ``<VENDOR>_BASE_URL``, ``<VENDOR>_MODEL`` and the
       API key variables of ``config.env``
    4. Explicit overrides passed by the caller

External Config File
--------------------
```
deepseek:
  model: deepseek-reasoner
qwen:
  base_url: https://dashscope-intl.aliyuncs.com/compatible-mode/v1
```

The resulting mapping is handed to a client constructor. Nothing here mutates
``os.environ`` or caches credentials.
"""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    DEEPSEEK_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    QWEN_DEFAULT_BASE_URL,
    QWEN_DEFAULT_MODEL,
)
from .env import is_placeholder, resolve_vendor_key

CONFIG_FILE_ENV = "OAPI_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "deepseek": {"base_url": DEEPSEEK_DEFAULT_BASE_URL, "model": DEEPSEEK_DEFAULT_MODEL},
    "qwen": {"base_url": QWEN_DEFAULT_BASE_URL, "model": QWEN_DEFAULT_MODEL},
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL, "model": OPENAI_DEFAULT_MODEL},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "base_url": "BASE_URL",
}


@lru_cache(maxsize=8)
def _load_config_file(path: str) -> Dict[str, Any]:
    p = Path(path).expanduser()
    if not p.is_file():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def _file_section(vendor: str) -> Dict[str, Any]:
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    section = _load_config_file(path).get(vendor)
    return dict(section) if isinstance(section, dict) else {}


def _env_overrides(vendor: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = vendor.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    key, _ = resolve_vendor_key(vendor)
    if key:
        out["api_key"] = key
    return out


def get_vendor_config(vendor: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration mapping for ``vendor``.

    Keys: ``base_url``, ``model`` and, when one was found, ``api_key``.
    ``None`` values in ``overrides`` are ignored so callers can forward
    optional constructor arguments unchanged. A placeholder ``api_key`` from
    the config file is discarded.
    """
    name = (vendor or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    cfg |= _file_section(name)
    if is_placeholder(cfg.get("api_key")):
        cfg.pop("api_key")
    cfg |= _env_overrides(name)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def clear_config_cache() -> None:
    """Forget parsed config files (tests and long-lived processes)."""
    _load_config_file.cache_clear()


__all__ = [
    "DEFAULTS",
    "CONFIG_FILE_ENV",
    "get_vendor_config",
    "clear_config_cache",
]

"""Vendor client factory.

Purpose
-------
Build a vendor client from its canonical name, filling settings the caller
left out from the configuration layer (defaults, config file, environment).
Client modules are imported lazily with ``importlib`` so importing the
factory does not import every vendor.

Failure modes
-------------
:class:`UnknownVendorError` for unknown names, import failures or bad
constructor arguments. A missing API key is reported with the environment
variables that were consulted.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Optional, Tuple, Type

from ..config import get_vendor_config
from ..config.env import get_env_var_candidates
from .compat_client import OpenAICompatibleClient


class UnknownVendorError(ValueError):
    """Raised when a vendor client cannot be resolved or initialized."""


class ClientFactory:
    """Create vendor clients based on a canonical name (e.g. ``"deepseek"``)."""

    _VENDORS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "oapi_chat.openai.client", "class": "OpenAIClient"},
        "deepseek": {"module": "oapi_chat.deepseek.client", "class": "DeepSeekClient"},
        "qwen": {"module": "oapi_chat.qwen.client", "class": "QwenClient"},
    }

    @classmethod
    def create(
        cls,
        vendor: str,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        **kwargs: Any,
    ) -> OpenAICompatibleClient:
        """Create a client for ``vendor``.

        Explicit ``api_key`` / ``base_url`` / ``model`` win over configuration.
        Remaining keyword arguments (``transport``, ``chunk_error_policy``)
        are forwarded to the constructor.

        Raises
        ------
        UnknownVendorError
            Unknown vendor, import failure, missing API key, or invalid
            constructor arguments.
        """
        name = (vendor or "").lower().strip()
        klass = cls._resolve(name, vendor)
        cfg = get_vendor_config(name, {"api_key": api_key, "base_url": base_url, "model": model})
        if not cfg.get("api_key"):
            tried = ", ".join(get_env_var_candidates(name))
            raise UnknownVendorError(f"No API key for '{name}'; pass api_key or set one of: {tried}")
        try:
            return klass(cfg["api_key"], cfg.get("base_url"), cfg.get("model"), **kwargs)
        except TypeError as exc:
            raise UnknownVendorError(f"Invalid arguments for '{name}' client constructor: {exc}") from exc

    @classmethod
    def _resolve(cls, name: str, original: str) -> Type[OpenAICompatibleClient]:
        entry = cls._VENDORS.get(name)
        if not entry:
            raise UnknownVendorError(f"Unknown vendor '{original}'")
        module_path, class_name = entry["module"], entry["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownVendorError(f"Failed to import module '{module_path}' for vendor '{original}': {exc}") from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownVendorError(f"Client class '{class_name}' not found in '{module_path}'") from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported vendor names in deterministic order."""
        return tuple(cls._VENDORS.keys())


def create(vendor: str, **kwargs: Any) -> OpenAICompatibleClient:
    """Shorthand for :meth:`ClientFactory.create`."""
    return ClientFactory.create(vendor, **kwargs)


__all__ = ["ClientFactory", "UnknownVendorError", "create"]

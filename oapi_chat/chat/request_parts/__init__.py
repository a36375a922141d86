"""One-module-per-concern request models; import from ``oapi_chat.chat.request``."""

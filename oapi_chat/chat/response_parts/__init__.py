"""One-module-per-concern response models; import from ``oapi_chat.chat.response``."""

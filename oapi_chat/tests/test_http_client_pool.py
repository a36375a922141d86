"""Unit tests for shared httpx client pool and timeout wiring.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base_url yields different instances.
- Closed clients are replaced; timeouts come from the environment.
"""
from __future__ import annotations

from oapi_chat.base.http import close_all_clients, get_httpx_client
from oapi_chat.base.timeouts import get_timeout_config


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="chat")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.example.com", purpose="stream")
    assert c1 is not c2, "Different purposes should not share the same client instance"


def test_different_base_url_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="chat")
    c2 = get_httpx_client("https://api.other.com", purpose="chat")
    assert c1 is not c2, "Different base URLs should not share the same client instance"


def test_close_all_clients_closes_and_replaces():
    c1 = get_httpx_client(None, purpose="chat")
    close_all_clients()
    assert c1.is_closed  # nosec B101
    c2 = get_httpx_client(None, purpose="chat")
    assert c2 is not c1 and not c2.is_closed  # nosec B101


def test_timeouts_default_to_none(monkeypatch):
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds is None  # nosec B101
    assert cfg.to_httpx().read is None  # nosec B101


def test_timeouts_from_environment(monkeypatch):
    monkeypatch.setenv("OAPI_HTTP_TIMEOUT_SECONDS", "30")
    monkeypatch.setenv("OAPI_CONNECT_TIMEOUT_SECONDS", "nope")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 30.0  # nosec B101
    assert cfg.connect_timeout_seconds is None  # nosec B101
    timeout = cfg.to_httpx()
    assert timeout.read == 30.0 and timeout.connect == 30.0  # nosec B101

    client = get_httpx_client(None, purpose="timeouts")
    assert client.timeout.read == 30.0  # nosec B101
